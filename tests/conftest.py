import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from cavern import create_app  # noqa: E402
from cavern import logging_utils  # noqa: E402
from cavern.routes.dungeon_api import clear_dungeon_cache  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: timing guard for floor generation")


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "SECRET_KEY": "test-secret"})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _reset_log_level():
    logging_utils.configure()
    yield
    logging_utils.configure()


@pytest.fixture(autouse=True)
def _reset_dungeon_cache():
    clear_dungeon_cache()
    yield
    clear_dungeon_cache()


@pytest.fixture()
def gif_dir(tmp_path, monkeypatch):
    """Point per-floor animation output at a temp directory."""
    out = tmp_path / "out"
    monkeypatch.setenv("DUNGEON_GIF_DIR", str(out))
    return out
