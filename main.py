"""
Desk Calendar - Main Entry Point

A desktop month calendar that keeps short event notes per day and saves
them locally.

Usage:
    python main.py
"""
import logging
import sys
from pathlib import Path

# Ensure we're in the right directory for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import load_settings
from gui.app import run_app


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings.get("log_level", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_app()


if __name__ == "__main__":
    main()
