"""Serialize an EnvTable to KEY=VALUE lines."""

import os
import re
import stat
import tempfile
from pathlib import Path

from flattener.errors import EnvWriteError
from flattener.merger import EnvTable
from utils import logger

# Anything a shell or dotenv parser would not take literally when unquoted.
_NEEDS_QUOTES_RE = re.compile(r"[\s\"'=#$`\\]")


def format_value(value: str) -> str:
    """Quote a value when it carries whitespace, quotes or shell-special chars."""
    if not _NEEDS_QUOTES_RE.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _target_mode(out_path: Path) -> int:
    """Mode of the file being replaced, or what open() would give a new one."""
    try:
        return stat.S_IMODE(out_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def render_env(table: EnvTable) -> str:
    return "".join(f"{entry.key}={format_value(entry.value)}\n" for entry in table)


def write_env_file(table: EnvTable, output_path) -> Path:
    """Write the table to ``output_path`` in one atomic replace."""
    out_path = Path(output_path)
    content = render_env(table)

    tmp_name = None
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{out_path.name}.", suffix=".tmp", dir=out_path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        # mkstemp creates 0600
        os.chmod(tmp_name, _target_mode(out_path))
        os.replace(tmp_name, out_path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise EnvWriteError(f"Could not write env file: {e}", file=out_path) from e

    logger.info(f"[writer] Env file written: {out_path} ({len(table)} keys)")
    return out_path
