import json
import logging

from cavern import logging_utils
from cavern.server import _configure_logging


def test_configure_logging_creates_file_and_is_idempotent(test_app, tmp_path, monkeypatch):
    monkeypatch.setattr(test_app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        path = _configure_logging(test_app)
        _configure_logging(test_app)
        assert len(root.handlers) == 2
        logging.getLogger("cavern.test").info("hello")
        for h in root.handlers:
            h.flush()
        assert path == str(tmp_path / "cavern.log")
        assert "hello" in (tmp_path / "cavern.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)


def test_key_value_format(capsys):
    logging_utils.configure(level="info", json_mode=False)
    logging_utils.get_logger("unit").info(event="floor_generated", floor=2, note="two words", skipped=None)
    line = capsys.readouterr().out.strip()
    assert line.startswith("level=info ts=")
    assert "event=floor_generated" in line
    assert "floor=2" in line
    assert "note=two_words" in line
    assert "logger=unit" in line
    assert "skipped" not in line


def test_json_mode(capsys):
    logging_utils.configure(level="info", json_mode=True)
    logging_utils.get_logger("unit").warn(event="floor_retry", attempt=1)
    rec = json.loads(capsys.readouterr().out)
    assert rec["level"] == "warn"
    assert rec["event"] == "floor_retry"
    assert rec["attempt"] == 1
    assert isinstance(rec["ts"], int)


def test_level_threshold(capsys):
    logging_utils.configure(level="warn")
    log = logging_utils.get_logger("unit")
    log.info(event="hidden")
    log.debug(event="hidden")
    log.error(event="shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err


def test_level_from_env(monkeypatch, capsys):
    monkeypatch.setenv("CAVERN_LOG_LEVEL", "debug")
    logging_utils.configure()
    logging_utils.get_logger("unit").debug(event="phase")
    assert "level=debug" in capsys.readouterr().out


def test_points_and_enums_render_plainly(capsys):
    from cavern.dungeon import Point, TileKind

    logging_utils.configure(level="info", json_mode=False)
    logging_utils.get_logger("unit").info(event="tile", at=Point(3, 4), kind=TileKind.SECRET_DOOR)
    line = capsys.readouterr().out
    assert "at=3,4" in line
    assert "kind=secret_door" in line


def test_json_mode_encodes_points(capsys):
    from cavern.dungeon import Point

    logging_utils.configure(level="info", json_mode=True)
    logging_utils.get_logger("unit").info(event="tile", at=Point(3, 4), ok=True)
    rec = json.loads(capsys.readouterr().out)
    assert rec["at"] == "3,4"
    assert rec["ok"] is True


def test_floor_generated_names_endpoints(capsys):
    import random

    from cavern.dungeon import FloorId
    from cavern.dungeon.pipeline import generate_floor

    floor = generate_floor(FloorId(0), 20, 20, rng=random.Random(2))
    out = capsys.readouterr().out
    r, c = floor.entrance
    assert f"entrance={r},{c}" in out


def test_is_enabled_tracks_threshold():
    logging_utils.configure(level="warn")
    assert not logging_utils.is_enabled("info")
    assert logging_utils.is_enabled("error")
