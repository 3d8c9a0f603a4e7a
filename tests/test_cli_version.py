import importlib
import json
import sys

import pytest

# run.py is imported as a module; start_server is patched so no socket is opened.


@pytest.fixture()
def run_module(monkeypatch):
    # Fresh import each time (run.py reads VERSION once)
    if 'run' in sys.modules:
        del sys.modules['run']
    mod = importlib.import_module('run')
    # main() installs a SIGINT handler; keep pytest's own
    monkeypatch.setattr(mod.signal, 'signal', lambda *a, **k: None)
    # generate --json relies on quiet logs for parseable stdout
    monkeypatch.setenv('LICHCRAWL_LOG_LEVEL', 'error')
    return mod


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert ver in out
    assert 'Lichcrawl' in out


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv('PORT', '5555')
    monkeypatch.setenv('HOST', '127.0.0.1')
    import lichcrawl.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)

    assert run_module.main(['server']) == 0
    assert calls == {'host': '127.0.0.1', 'port': 5555, 'debug': False}
    out = capsys.readouterr().out
    assert 'Lichcrawl Level Server' in out
    assert '5555' in out


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}
    monkeypatch.setenv('PORT', '5555')
    import lichcrawl.server as server_mod
    monkeypatch.setattr(server_mod, 'start_server', lambda host, port, debug: calls.update(port=port, debug=debug))
    assert run_module.main(['server', '--port', '6001', '--debug']) == 0
    assert calls == {'port': 6001, 'debug': True}


def test_generate_json(run_module, capsys):
    rc = run_module.main(['generate', '1', '--seed', '7', '--width', '40', '--height', '40', '--json'])
    assert rc == 0
    data = json.loads(capsys.readouterr().out)
    assert data['level'] == 1
    assert data['seed'] == 7
    assert data['width'] == 40
    assert len(data['tiles']) == 40


def test_generate_text_map(run_module, capsys):
    rc = run_module.main(['generate', '5', '--seed', 'lich', '--width', '40', '--height', '40'])
    assert rc == 0
    out = capsys.readouterr().out
    assert 'style=machine' in out
    assert '@' in out
    assert 'T' in out


def test_generate_rejects_bad_input(run_module, capsys):
    assert run_module.main(['generate', '0']) == 2
    assert run_module.main(['generate', '1', '--style', 'atlantis']) == 2
    assert run_module.main(['generate', '1', '--width', '5']) == 2
    err = capsys.readouterr().err
    assert '[ERROR]' in err
