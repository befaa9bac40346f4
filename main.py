"""
Connections - Entry Point

Launches the game window and routes player intents into the puzzle engine.

Example:
    python main.py
    python main.py --mistakes 6   # More forgiving game
    python main.py --debug        # Also log to connections.log
"""

import os
import sys
import logging
import argparse
from typing import Any, Dict, Optional

from PyQt5.QtWidgets import QApplication

from connections.control_ui import GameWindow
from connections.game_engine import PuzzleEngine
from connections.presentation import build_view
from connections.puzzle import DEFAULT_PUZZLE, PuzzleDefinition
from connections.settings import load_settings


logger = logging.getLogger(__name__)


def configure_logging(debug: bool, log_file: str) -> None:
    """
    Configure logging - console always, file output in debug mode.

    Args:
        debug: Log at DEBUG level and write to log_file
        log_file: Path of the debug log file
    """
    handlers = [logging.StreamHandler()]  # Console output
    if debug:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


class Application:
    """
    Main application controller.

    Owns the engine for one game session and keeps the window in sync with it.
    """

    def __init__(self, settings: Dict[str, Any],
                 definition: PuzzleDefinition = DEFAULT_PUZZLE,
                 mistakes_override: Optional[int] = None):
        """
        Initialize the application.

        Args:
            settings: Loaded settings dictionary
            definition: Puzzle to play
            mistakes_override: CLI mistake budget (overrides saved setting)
        """
        self.settings = settings
        self.window: Optional[GameWindow] = None

        mistakes = mistakes_override
        if mistakes is None:
            mistakes = settings.get("mistakes_allowed", PuzzleEngine.DEFAULT_MISTAKES)

        self.engine = PuzzleEngine(
            definition,
            mistakes_allowed=mistakes,
            shuffle_on_start=settings.get("shuffle_on_start", True),
        )

    def setup(self):
        """Set up the UI and connect signals."""
        self.window = GameWindow()
        self.window.intent_requested.connect(self._on_intent)
        self.window.shutdown_requested.connect(self._on_shutdown)
        self._refresh()
        logger.info("Application initialized")

    def _on_intent(self, intent):
        """Apply an intent from the window and redraw."""
        logger.debug(f"Intent: {intent}")
        self.engine.dispatch(intent)

        if self.engine.quit_requested:
            self.window.close()
            return

        self._refresh()

    def _refresh(self):
        self.window.render(build_view(self.engine))

    def _on_shutdown(self):
        """Handle window close."""
        logger.info(f"Shutdown requested, final state: {self.engine.get_state_string()}")

    def run(self) -> int:
        """
        Run the application.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Connections - find four groups of four"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging (also written to the log file)"
    )
    parser.add_argument(
        "--mistakes", "-m",
        type=int,
        default=None,
        help="Number of mistakes allowed (default: from config.json, else 4)"
    )
    return parser.parse_args()


def main():
    """Initialize and run the Connections game."""
    args = parse_args()
    settings = load_settings()

    # CLI flag or DEBUG env var overrides saved setting
    debug = args.debug or bool(os.getenv("DEBUG")) or settings.get("debug_enabled", False)
    configure_logging(debug, settings.get("log_file", "connections.log"))

    app = QApplication(sys.argv)

    application = Application(settings, mistakes_override=args.mistakes)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
