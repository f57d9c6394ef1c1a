"""
game.py
-------
Entry point for the loading screen demo.

Usage:
    python -m src.game                      # Run with loading_screen.json
    python -m src.game --settings cfg.yaml  # Custom settings file
    python -m src.game --editor             # Editor-like mode (no hold time)
"""

import argparse
import sys

from src.core.runtime.game_loop import GameLoop
from src.core.runtime.game_settings import Debug


def main(argv=None):
    parser = argparse.ArgumentParser(description="Loading screen demo")
    parser.add_argument("--settings", default=None,
                        help="Path to a .json or .yaml settings file")
    parser.add_argument("--editor", action="store_true", default=Debug.EDITOR_MODE,
                        help="Run as an editor-like environment")
    parser.add_argument("--server", action="store_true", default=Debug.DEDICATED_SERVER,
                        help="Run as a dedicated server session (no loading screen)")
    args = parser.parse_args(argv)

    GameLoop(settings_file=args.settings, editor_mode=args.editor,
             dedicated_server=args.server).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
