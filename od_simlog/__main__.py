"""Entry point for: python -m od_simlog"""

from .main import run

if __name__ == "__main__":
    run()
