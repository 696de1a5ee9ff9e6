"""
Main entry point for DepGraph application.

Usage:
    python -m depgraph_app GRAPH.json --root RESOURCE_ID [--depth 2]
    depgraph GRAPH.json --root RESOURCE_ID  (if installed)
"""

import sys
import logging
import argparse
import traceback
from pathlib import Path
from datetime import datetime

logger = logging.getLogger("depgraph_app")


def setup_exception_hook():
    """Setup global exception hook to catch Qt exceptions."""
    log_file = Path.cwd() / "crash_log.txt"

    def exception_hook(exctype, value, tb):
        # Write to log file
        error_msg = ''.join(traceback.format_exception(exctype, value, tb))
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"UNHANDLED EXCEPTION at {datetime.now()}\n")
            f.write(f"{'='*60}\n")
            f.write(error_msg)
            f.write("\n")

        logger.critical("Unhandled exception (details in %s)\n%s", log_file, error_msg)

        # Call default handler
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = exception_hook


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Explore a resource's dependency graph.",
    )
    parser.add_argument("graph_file", help="JSON file with 'nodes' and 'edges'")
    parser.add_argument("--root", required=True, help="ID of the focal resource")
    parser.add_argument("--depth", type=int, choices=(1, 2), default=1,
                        help="1 = direct neighbors, 2 = extended (default: 1)")
    parser.add_argument("--log-level", default="INFO",
                        choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return parser.parse_args(argv)


def main(argv=None):
    """Launch the DepGraph application."""
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    # Setup exception hook first
    setup_exception_hook()

    from PyQt6.QtWidgets import QApplication
    from PyQt6.QtCore import Qt

    # High DPI support
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")
    app.setApplicationName("DepGraph")

    # Import and apply dark theme
    from depgraph_app.resources.styles import DARK_STYLESHEET
    app.setStyleSheet(DARK_STYLESHEET)

    # Import and create main window
    from depgraph_core.adapters.json_provider import JsonGraphProvider
    from depgraph_app.views.main_window import MainWindow

    window = MainWindow(JsonGraphProvider(args.graph_file), args.root, args.depth)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
