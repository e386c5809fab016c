import importlib
import json
import sys

import pytest
from PIL import Image

# run.py is imported as a module; start_server is patched so no networking starts.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert 'Cavern' in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    import cavern.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    assert run_module.main(['server']) == 0
    assert calls == {'host': '127.0.0.1', 'port': 5555, 'debug': False}


def test_server_flags_beat_env(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv('PORT', '5555')
    import cavern.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    run_module.main(['server', '--port', '8081', '--host', 'localhost', '--debug'])
    assert calls == {'host': 'localhost', 'port': 8081, 'debug': True}


def test_generate_json_to_stdout(run_module, capsys):
    code = run_module.main(['generate', '--width', '12', '--height', '12', '--seed', '5'])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload['dungeon_type'] == 'Cave'
    assert len(payload['floors'][0]['data']) == 144


def test_generate_same_seed_same_output(run_module, capsys):
    run_module.main(['generate', '--width', '12', '--height', '12', '--seed', 'abc'])
    first = capsys.readouterr().out
    run_module.main(['generate', '--width', '12', '--height', '12', '--seed', 'abc'])
    assert capsys.readouterr().out == first


def test_generate_ascii_to_file(run_module, tmp_path):
    out = tmp_path / 'dungeon.txt'
    code = run_module.main([
        'generate', '--width', '14', '--height', '10', '--floors', '2', '--seed', '3',
        '--format', 'ascii', '--output', str(out),
    ])
    assert code == 0
    text = out.read_text()
    assert text.startswith('Floor 0\n')
    assert 'Floor 1' in text


def test_generate_gif_to_file(run_module, tmp_path):
    out = tmp_path / 'dungeon.gif'
    code = run_module.main([
        'generate', '--width', '12', '--height', '12', '--floors', '2', '--seed', '3',
        '--format', 'gif', '--output', str(out),
    ])
    assert code == 0
    img = Image.open(out)
    assert img.n_frames == 2


def test_generate_gif_requires_output(run_module, capsys):
    assert run_module.main(['generate', '--format', 'gif']) == 2
    assert '--output' in capsys.readouterr().err


def test_generate_invalid_size(run_module, capsys):
    assert run_module.main(['generate', '--width', '5']) == 2
    assert '[ERROR]' in capsys.readouterr().err


def test_generate_frames_written(run_module, tmp_path, gif_dir):
    out = tmp_path / 'dungeon.json'
    code = run_module.main(['generate', '--width', '12', '--height', '12', '--seed', '3', '--frames', '--output', str(out)])
    assert code == 0
    assert (gif_dir / 'floor_0.gif').exists()


def test_generate_unwritable_output(run_module, tmp_path, capsys):
    code = run_module.main([
        'generate', '--width', '12', '--height', '12', '--seed', '3',
        '--output', str(tmp_path / 'missing' / 'dungeon.json'),
    ])
    assert code == 1
    assert 'event=output_write_failed' in capsys.readouterr().err
