"""Tool settings: config.yaml defaults and YAML2ENV_* overrides."""

from utils.config_loader import DEFAULTS, apply_env_overrides, load_config, load_env


def test_missing_config_falls_back_to_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "config.yaml") == DEFAULTS


def test_partial_config_is_filled_from_defaults(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("logging:\n  level: DEBUG\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["logging"]["level"] == "DEBUG"
    assert cfg["logging"]["rotation"] == DEFAULTS["logging"]["rotation"]
    assert cfg["flatten"]["null_policy"] == "empty"


def test_env_overrides(tmp_path) -> None:
    cfg = apply_env_overrides(
        load_config(tmp_path / "none.yaml"),
        {"YAML2ENV_LOG_LEVEL": "warning", "YAML2ENV_NULL_POLICY": "OMIT"},
    )
    assert cfg["logging"]["level"] == "WARNING"
    assert cfg["flatten"]["null_policy"] == "omit"


def test_unknown_null_policy_falls_back_to_default(tmp_path) -> None:
    """A bad override must not break import of the settings module."""
    cfg = apply_env_overrides(
        load_config(tmp_path / "none.yaml"), {"YAML2ENV_NULL_POLICY": "drop"}
    )
    assert cfg["flatten"]["null_policy"] == "empty"


def test_unknown_null_policy_in_config_file(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("flatten:\n  null_policy: skip\n", encoding="utf-8")
    cfg = apply_env_overrides(load_config(path), {})
    assert cfg["flatten"]["null_policy"] == "empty"


def test_process_env_wins_over_dotenv(tmp_path, monkeypatch) -> None:
    dotenv = tmp_path / ".env"
    dotenv.write_text("YAML2ENV_LOG_LEVEL=ERROR\nONLY_IN_FILE=1\n", encoding="utf-8")
    monkeypatch.setenv("YAML2ENV_LOG_LEVEL", "DEBUG")
    env = load_env(dotenv)
    assert env["YAML2ENV_LOG_LEVEL"] == "DEBUG"
    assert env["ONLY_IN_FILE"] == "1"
