import json

from tuberelay.utils.config import DEFAULT_HOST, DEFAULT_PORT, Config


def test_defaults(tmp_path):
    config = Config(tmp_path / "settings.json", environ={})

    assert config.api_key is None
    assert config.host == DEFAULT_HOST
    assert config.port == DEFAULT_PORT
    assert config.server_url == f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"


def test_environment_values(tmp_path):
    config = Config(tmp_path / "settings.json", environ={
        "RAPIDAPI_KEY": "  secret \n",
        "HOST": "0.0.0.0",
        "PORT": "8080",
        "TUBERELAY_SERVER_URL": "http://relay.local:9000/",
    })

    assert config.api_key == "secret"
    assert config.host == "0.0.0.0"
    assert config.port == 8080
    assert config.server_url == "http://relay.local:9000"


def test_blank_key_and_invalid_port(tmp_path):
    config = Config(tmp_path / "settings.json", environ={"RAPIDAPI_KEY": "   ", "PORT": "http"})

    assert config.api_key is None
    assert config.port == DEFAULT_PORT


def test_settings_file_round_trip(tmp_path):
    settings = tmp_path / "nested" / "settings.json"
    config = Config(settings, environ={})
    config.set_download_path(tmp_path / "media")

    reloaded = Config(settings, environ={})
    assert reloaded.download_path == tmp_path / "media"
    assert json.loads(settings.read_text(encoding="utf-8"))["download_path"] == str(tmp_path / "media")


def test_corrupt_settings_file_is_ignored(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text("{not json", encoding="utf-8")

    config = Config(settings, environ={})
    assert config.server_url.startswith("http://")


def test_server_url_follows_port_when_not_overridden(tmp_path):
    config = Config(tmp_path / "settings.json", environ={"PORT": "8080"})

    assert config.port == 8080
    assert config.server_url == "http://127.0.0.1:8080"
    assert config.local_server_url == config.server_url


def test_server_url_on_wildcard_host_uses_loopback(tmp_path):
    config = Config(tmp_path / "settings.json", environ={"HOST": "0.0.0.0", "PORT": "9000"})

    assert config.host == "0.0.0.0"
    assert config.server_url == "http://127.0.0.1:9000"


def test_settings_file_server_url_wins_over_port(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"server_url": "http://relay.lan:3002/"}), encoding="utf-8")

    config = Config(settings, environ={"PORT": "8080"})
    assert config.server_url == "http://relay.lan:3002"
    assert config.local_server_url == "http://127.0.0.1:8080"
