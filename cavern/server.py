"""
project: Cavern
module: server.py
License: MIT

Server bootstrap: builds the Flask app and configures logging before serving.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from flask import Flask

from cavern import create_app
from cavern.logging_utils import log

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Run the Flask development server with file and console logging."""
    app = create_app()
    _configure_logging(app)
    log.info(event="server_start", host=host, port=port, debug=debug)
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)


def _configure_logging(app: Flask) -> str:
    """Log to the console and to a rotating ``cavern.log`` in the instance folder.

    Existing root handlers are replaced, so calling this again does not
    duplicate output. Returns the log file path.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "cavern.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
