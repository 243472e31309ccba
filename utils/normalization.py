import re
from datetime import date

_NON_ALNUM_RE = re.compile(r"[^A-Z0-9]")


def key_text(key) -> str:
    """Render a mapping key (YAML keys are not always strings) as text."""
    if key is None:
        return ""
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, date):
        return key.isoformat()
    return str(key)


def normalize_key_segment(segment) -> str:
    """Normalize one path segment into its env-key form.

    Rules:
    - sequence indices render as base-10 digits
    - uppercase
    - every character outside A-Z / 0-9 becomes one underscore (runs are kept)
    """
    if isinstance(segment, int) and not isinstance(segment, bool):
        return str(segment)
    return _NON_ALNUM_RE.sub("_", key_text(segment).upper())


def build_env_key(segments) -> str:
    """Join a root-to-leaf path of mapping keys and indices into one env key.

    Raises ValueError when the path is empty or any segment normalizes to
    nothing.
    """
    parts = [normalize_key_segment(s) for s in segments]
    if not parts:
        raise ValueError("empty key path")
    for depth, part in enumerate(parts):
        if not part:
            raise ValueError(f"key at depth {depth} is empty after normalization")
    return "_".join(parts)


def format_key_path(segments) -> str:
    """Human-readable path for diagnostics, e.g. ``db.hosts[0]``."""
    out = ""
    for segment in segments:
        if isinstance(segment, int) and not isinstance(segment, bool):
            out += f"[{segment}]"
        else:
            text = key_text(segment)
            out = f"{out}.{text}" if out else text
    return out
