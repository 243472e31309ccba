"""Walk one parsed YAML document and emit its leaves as env entries."""

from dataclasses import dataclass

from flattener.coercion import coerce_value
from flattener.errors import InvalidDocumentRoot, InvalidKey, UnsupportedValue
from utils import logger
from utils.normalization import build_env_key, format_key_path, key_text


@dataclass(frozen=True)
class EnvEntry:
    key: str
    value: str
    source: str
    path: tuple = ()

    @property
    def dotted_path(self) -> str:
        return format_key_path(self.path)


def flatten_document(document, source, null_policy: str = "empty") -> list[EnvEntry]:
    """Flatten a document whose root must be a mapping.

    Entries come out depth-first in the document's own order: mapping pairs
    as written, sequence elements by zero-based index. Empty mappings and
    sequences contribute nothing.
    """
    source = str(source)
    if not isinstance(document, dict):
        kind = "empty document" if document is None else type(document).__name__
        raise InvalidDocumentRoot(f"Root node must be a mapping, got {kind}", file=source)

    entries: list[EnvEntry] = []
    _walk(document, (), source, null_policy, entries, set())
    logger.debug(f"[flattener] {source}: {len(entries)} entries")
    return entries


def _walk(
    node, path: tuple, source: str, null_policy: str, out: list[EnvEntry], active: set
) -> None:
    if isinstance(node, (dict, list)):
        # ids of the containers between the root and this node
        if id(node) in active:
            raise UnsupportedValue(
                "Unsupported value: recursive alias", file=source, path=format_key_path(path)
            )
        active.add(id(node))
        if isinstance(node, dict):
            children = ((key_text(key), value) for key, value in node.items())
        else:
            children = enumerate(node)
        for segment, child in children:
            _walk(child, path + (segment,), source, null_policy, out, active)
        active.discard(id(node))
        return

    try:
        env_key = build_env_key(path)
    except ValueError as e:
        raise InvalidKey(f"Invalid key: {e}", file=source, path=format_key_path(path)) from e

    try:
        value = coerce_value(node, null_policy)
    except ValueError as e:
        raise UnsupportedValue(
            f"Unsupported value: {e}", file=source, path=format_key_path(path)
        ) from e

    if value is None:
        logger.debug(f"[flattener] {source}: omitting null {format_key_path(path)}")
        return

    out.append(EnvEntry(key=env_key, value=value, source=source, path=path))
