import start_server


def test_port_defaults_to_8000(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    assert start_server._port_from_env() == 8000


def test_port_read_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9123")
    assert start_server._port_from_env() == 9123


def test_invalid_port_falls_back(monkeypatch, capsys):
    monkeypatch.setenv("PORT", "eighty")
    assert start_server._port_from_env() == 8000
    assert "PORT='eighty'" in capsys.readouterr().err


def test_main_serves_app_from_src(monkeypatch):
    calls = []
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setattr(start_server.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    start_server.main()

    ((app, kwargs),) = calls
    assert app == "fetchroute.main:app"
    assert kwargs["port"] == 9000
    assert kwargs["app_dir"].endswith("src")
