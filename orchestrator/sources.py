"""Read the list-of-files config and parse the YAML sources it names."""

from pathlib import Path

import yaml

from flattener.errors import ConfigReadError, YamlParseError
from utils import config, logger

YAML_SUFFIXES = (".yaml", ".yml")


def _allowed_extensions() -> tuple[str, ...]:
    return tuple(ext.lower() for ext in config["sources"].get("extensions", YAML_SUFFIXES))


def _parse_line_list(text: str) -> list[str]:
    """One path per line; blank lines and # comments are skipped."""
    entries = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def _parse_yaml_list(text: str, config_path: Path) -> list[str]:
    """A YAML list of paths, or a mapping with a ``sources`` list."""
    try:
        data = yaml.safe_load(text)
    except (yaml.YAMLError, ValueError) as e:
        raise ConfigReadError(f"Config file is not valid YAML: {e}", file=config_path) from e

    if isinstance(data, dict):
        data = data.get("sources")
    if not isinstance(data, list) or not all(isinstance(p, str) for p in data):
        raise ConfigReadError(
            "YAML config must be a list of paths or a mapping with a 'sources' list",
            file=config_path,
        )
    return [p.strip() for p in data if p.strip()]


def read_source_list(config_path) -> list[Path]:
    """Return the ordered YAML source paths named by the config file.

    Relative paths resolve against the config file's directory.
    """
    config_path = Path(config_path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"Could not read config file: {e}", file=config_path) from e

    if config_path.suffix.lower() in YAML_SUFFIXES:
        raw_paths = _parse_yaml_list(text, config_path)
    else:
        raw_paths = _parse_line_list(text)

    if not raw_paths:
        raise ConfigReadError("Config file lists no YAML source files", file=config_path)

    allowed = _allowed_extensions()
    paths = []
    for raw in raw_paths:
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = config_path.parent / path
        if path.suffix.lower() not in allowed:
            raise ConfigReadError(
                f"All paths in config file must have one of the extensions "
                f"{', '.join(allowed)}: {raw}",
                file=config_path,
            )
        paths.append(path)

    logger.info(f"[sources] {config_path.name}: {len(paths)} source file(s)")
    return paths


def load_yaml_document(path):
    """Parse exactly one YAML document from ``path``."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise YamlParseError(f"Could not read yaml file: {e}", file=path) from e
    except yaml.YAMLError as e:
        raise YamlParseError(f"Invalid YAML: {e}", file=path) from e
    except ValueError as e:
        # constructor errors outside YAMLError: bad dates, oversized ints
        raise YamlParseError(f"Invalid YAML value: {e}", file=path) from e

    logger.debug(f"[sources] Parsed {path.name}")
    return document
