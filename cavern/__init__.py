"""
project: Cavern
module: __init__.py
License: MIT

Flask application factory.

Wires the dungeon and seed blueprints into a Flask app. Configuration is
sourced from environment variables (optionally from a `.env` file) with
development defaults; a local `instance/` directory holds the rotating log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so SECRET_KEY and DUNGEON_* settings can be supplied
# without exporting shell variables during development.
load_dotenv()


def create_app(config: dict | None = None) -> Flask:
    """Return a configured Flask app; ``config`` entries override env-derived defaults."""
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve the API; only file logging is lost
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        JSON_SORT_KEYS=False,
        DUNGEON_ENABLE_GENERATION_METRICS=os.getenv("DUNGEON_ENABLE_GENERATION_METRICS", "1") == "1",
        DUNGEON_MAX_ATTEMPTS=int(os.getenv("DUNGEON_MAX_ATTEMPTS", "5")),
        DUNGEON_MAX_FLOORS=int(os.getenv("DUNGEON_MAX_FLOORS", "10")),
    )
    if config:
        app.config.update(config)

    from cavern.routes.dungeon_api import bp_dungeon
    from cavern.routes.seed_api import bp_seed

    app.register_blueprint(bp_dungeon)
    app.register_blueprint(bp_seed)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
