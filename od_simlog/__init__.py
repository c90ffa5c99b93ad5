"""
Protection Sim Narrative Log Package

This package turns the hour-by-hour state of a protection sim
workbook into a readable narrative log, and parses such logs
back into structured per-hour records.

Core entry points:
- GameLogGenerator / generate_log(): workbook -> narrative log
- NarrativeParser / parse_log(): narrative log -> records
- LogConfig, ParserConfig: configure runs
"""

from .config import LogConfig, ParserConfig
from .generator import GameLogGenerator, GenerationResult, generate_log
from .parser import NarrativeParser, ParsedAction, ParseResult, parse_log, parse_text

__all__ = [
    "LogConfig",
    "ParserConfig",
    "GameLogGenerator",
    "GenerationResult",
    "generate_log",
    "NarrativeParser",
    "ParsedAction",
    "ParseResult",
    "parse_log",
    "parse_text",
]
