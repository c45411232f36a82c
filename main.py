#!/usr/bin/env python3
"""
Main script for the pain mapping application.

Builds the service container and shows the pain mapping window.
"""
import sys
from PySide6.QtWidgets import QApplication

from painmap.application.app import get_container
from painmap.presentation.components.pain_mapping_window import PainMappingWindow


def main() -> int:
    # Create application
    app = QApplication(sys.argv)
    app.setApplicationName("Pain Map")

    # Create and show main window
    window = PainMappingWindow(get_container())
    window.show()

    # Start the event loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
