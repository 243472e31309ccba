"""Full pipeline: read config -> parse -> flatten -> merge -> write."""

from datetime import datetime
from pathlib import Path

from flattener.flattener import flatten_document
from flattener.merger import EnvTable, merge_sources
from orchestrator.env_writer import write_env_file
from orchestrator.sources import load_yaml_document, read_source_list
from utils import config, logger


def _flatten_all(paths: list[Path], null_policy: str):
    """Parse and flatten one file at a time, in configuration order."""
    for path in paths:
        document = load_yaml_document(path)
        entries = flatten_document(document, path, null_policy)
        logger.info(f"[pipeline] {path.name}: {len(entries)} entries")
        yield str(path), entries


def _build(config_path, null_policy: str | None) -> tuple[list[Path], EnvTable]:
    null_policy = null_policy or config["flatten"]["null_policy"]
    paths = read_source_list(config_path)
    return paths, merge_sources(_flatten_all(paths, null_policy))


def build_env_table(config_path, null_policy: str | None = None) -> EnvTable:
    """Build the merged EnvTable for a config file. Nothing is written."""
    return _build(config_path, null_policy)[1]


def run_build(
    config_path,
    output_path=None,
    null_policy: str | None = None,
    dry_run: bool = False,
) -> dict:
    """Build the table and, unless dry_run, write it out. Returns summary dict.

    The output file is only touched after every source has been merged, so
    any error leaves it as it was.
    """
    start = datetime.now()
    logger.info(f"[pipeline] Building env file from {config_path}")

    paths, table = _build(config_path, null_policy)

    written = None
    if not dry_run:
        if output_path is None:
            raise ValueError("output_path is required unless dry_run is set")
        written = write_env_file(table, output_path)

    elapsed = (datetime.now() - start).total_seconds()
    summary = {
        "sources": len(paths),
        "entries": len(table),
        "overrides": len(table.overrides),
        "output_path": str(written) if written else None,
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "elapsed_seconds": round(elapsed, 3),
    }

    logger.info(
        f"[pipeline] Done in {elapsed:.3f}s - "
        f"{summary['entries']} keys from {summary['sources']} source(s)"
    )
    return summary
