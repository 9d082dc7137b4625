"""
Command line entry point for drill-editor.

Usage:
    drill-editor                      start with a new drill
    drill-editor 42                   open stored drill 42 from the backend
    drill-editor rondo.drill.json     open a local drill file
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication, QMessageBox

from . import __version__
from .drills.document import DrillDocument
from .gui.main_window import MainWindow
from .persistence.files import DRILL_FILE_SUFFIX
from .session import DrillEditorSession
from .settings import AppSettings
from .settings.types import ValidationResult
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drill-editor",
        description="Edit animated training drills frame by frame.",
    )
    parser.add_argument(
        "drill",
        nargs="?",
        help=f"stored drill id, or a local *{DRILL_FILE_SUFFIX} / *.json file to open",
    )
    parser.add_argument(
        "--profile", default="default", help="settings profile to use (default: %(default)s)"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def is_drill_file(target: str) -> bool:
    """Whether a startup argument names a local file rather than a drill id."""
    return target.endswith(".json") or Path(target).is_file()


def open_startup_drill(session: DrillEditorSession, target: str) -> Optional[DrillDocument]:
    """Open the drill named on the command line.

    Returns:
        The opened document, or None (see session.failure_reason)
    """
    if is_drill_file(target):
        logger.info(f"Opening drill file from command line: {target}")
        return session.open_file(Path(target))
    if session.backend is None:
        session.failure_reason = "No backend configured"
        return None
    logger.info(f"Loading drill {target} from command line")
    return session.load(target)


def report_validation(validation: ValidationResult) -> bool:
    """Log validation results and show blocking errors. Returns True if usable."""
    for warning in validation.warnings:
        logger.warning(f"Configuration warning: {warning}")
    if validation.is_valid:
        return True

    for error in validation.errors:
        logger.error(f"Configuration error: {error}")
    box = QMessageBox(QMessageBox.Icon.Critical, "Configuration Error", "Settings are invalid.")
    box.setInformativeText("Fix them in the settings file, then start Drill Editor again.")
    box.setDetailedText("\n".join(validation.errors))
    box.exec()
    return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Application entry point."""
    args, qt_args = build_parser().parse_known_args(argv)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName("drill_editor")
    app.setApplicationVersion(__version__)
    app.setOrganizationName("drill_editor")
    app.setStyle("Fusion")

    settings = AppSettings(profile=args.profile)
    log_file = setup_logging(settings)
    logger.info(f"Drill Editor {__version__} starting (profile '{args.profile}')")
    if log_file is not None:
        logger.debug(f"Writing log to {log_file}")

    if not report_validation(settings.validate()):
        return 1

    window = MainWindow(settings)
    window.show()

    if args.drill:
        document = open_startup_drill(window.session, args.drill)
        if document is None:
            reason = window.session.failure_reason
            logger.error(f"Could not open {args.drill}: {reason}")
            QMessageBox.warning(window, "Open Failed", f"Could not open {args.drill}:\n{reason}")
            document = window.session.new()
        elif window.session.drill_id is not None:
            settings.ui.add_recent_drill(window.session.drill_id)
        window.set_document(document)

    if settings.is_first_run:
        settings.set_first_run_complete()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
