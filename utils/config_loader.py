import copy
import os
from pathlib import Path

import yaml
from dotenv import dotenv_values
from loguru import logger as _logger

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = BASE_DIR / "config.yaml"
ENV_PATH = BASE_DIR / ".env"

NULL_POLICIES = ("empty", "omit")

DEFAULTS = {
    "logging": {
        "level": "INFO",
        "format": "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        "path": "",
        "rotation": "10 MB",
        "retention": "30 days",
    },
    "flatten": {"null_policy": "empty"},
    "sources": {"extensions": [".yaml", ".yml"]},
}


def _fill_defaults(loaded: dict, defaults: dict) -> dict:
    result = copy.deepcopy(defaults)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _fill_defaults(value, result[key])
        else:
            result[key] = value
    return result


def load_config(path: Path = CONFIG_PATH) -> dict:
    """Load tool settings, falling back to built-in defaults for anything missing."""
    if not Path(path).exists():
        return copy.deepcopy(DEFAULTS)
    with open(path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    return _fill_defaults(loaded, DEFAULTS)


def load_env(path: Path = ENV_PATH) -> dict:
    # Merge .env file values with process environment variables.
    # Runtime env takes precedence.
    file_env = {k: v for k, v in dotenv_values(path).items() if v is not None}
    merged = dict(file_env)
    merged.update(os.environ)
    return merged


def apply_env_overrides(cfg: dict, environ: dict) -> dict:
    """Apply YAML2ENV_* variables on top of the file settings."""
    if environ.get("YAML2ENV_LOG_LEVEL"):
        cfg["logging"]["level"] = environ["YAML2ENV_LOG_LEVEL"].upper()
    if environ.get("YAML2ENV_LOG_FILE"):
        cfg["logging"]["path"] = environ["YAML2ENV_LOG_FILE"]
    if environ.get("YAML2ENV_NULL_POLICY"):
        cfg["flatten"]["null_policy"] = environ["YAML2ENV_NULL_POLICY"].lower()

    policy = cfg["flatten"]["null_policy"]
    if policy not in NULL_POLICIES:
        _logger.warning(
            f"[config] Unknown null_policy {policy!r} (expected one of "
            f"{', '.join(NULL_POLICIES)}), using {DEFAULTS['flatten']['null_policy']!r}"
        )
        cfg["flatten"]["null_policy"] = DEFAULTS["flatten"]["null_policy"]
    return cfg


env = load_env()
config = apply_env_overrides(load_config(), env)
