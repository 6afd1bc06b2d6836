import pytest

from patients_service.config import ConfigError, must_load, must_load_path


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_applied(tmp_path):
    path = _write(tmp_path, "sql:\n  path: queries\n")
    cfg = must_load_path(path)
    assert cfg.env == "local"
    assert cfg.server.host == "localhost"
    assert cfg.server.port == 8080
    assert cfg.db.port == 5432
    assert cfg.db.db_name == "patients_db"
    assert cfg.db.ssl_mode == "disable"
    assert cfg.sql.path == "queries"


def test_values_override_defaults(tmp_path):
    path = _write(
        tmp_path,
        "env: prod\nserver:\n  host: 0.0.0.0\n  port: 9000\n"
        "db:\n  host: db\n  db_name: other\nsql:\n  path: /sql\n",
    )
    cfg = must_load_path(path)
    assert cfg.env == "prod"
    assert cfg.server.host == "0.0.0.0"
    assert cfg.server.port == 9000
    assert cfg.db.host == "db"
    assert cfg.db.db_name == "other"
    assert cfg.db.user == "postgres"


def test_missing_sql_path_is_error(tmp_path):
    path = _write(tmp_path, "env: local\n")
    with pytest.raises(ConfigError, match="cannot read config"):
        must_load_path(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="config file does not exist"):
        must_load_path(tmp_path / "absent.yaml")


def test_bad_port(tmp_path):
    path = _write(tmp_path, "server:\n  port: abc\nsql:\n  path: x\n")
    with pytest.raises(ConfigError):
        must_load_path(path)


def test_must_load_empty_env():
    with pytest.raises(ConfigError, match="config path is empty"):
        must_load({})


def test_must_load_uses_config_path(tmp_path):
    path = _write(tmp_path, "sql:\n  path: q\n")
    cfg = must_load({"CONFIG_PATH": str(path)})
    assert cfg.sql.path == "q"