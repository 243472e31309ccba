from dataclasses import dataclass

from flattener.flattener import EnvEntry
from utils import logger


@dataclass(frozen=True)
class Override:
    key: str
    previous: EnvEntry
    current: EnvEntry


class EnvTable:
    """Ordered env key -> entry mapping with last-write-wins updates.

    A key keeps the position where it was first defined; later definitions
    only replace its value and provenance.
    """

    def __init__(self):
        self._entries: dict[str, EnvEntry] = {}
        self.overrides: list[Override] = []

    def add(self, entry: EnvEntry) -> EnvEntry | None:
        """Insert or overwrite an entry. Returns the entry it replaced, if any."""
        previous = self._entries.get(entry.key)
        # dict assignment to an existing key keeps its insertion position
        self._entries[entry.key] = entry
        if previous is not None:
            self.overrides.append(Override(entry.key, previous, entry))
            logger.debug(
                f"[merger] {entry.key} overridden by {entry.source} "
                f"(was {previous.value!r} from {previous.source})"
            )
        return previous

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> EnvEntry:
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries.values())

    def keys(self) -> list[str]:
        return list(self._entries)

    def as_dict(self) -> dict[str, str]:
        return {key: entry.value for key, entry in self._entries.items()}


def merge_sources(flattened) -> EnvTable:
    """Merge (source, entries) pairs in the given order into one EnvTable.

    Collisions between files and within one file (keys that only collide
    after normalization) follow the same last-write-wins rule.
    """
    table = EnvTable()
    for source, entries in flattened:
        before = len(table.overrides)
        for entry in entries:
            table.add(entry)
        replaced = len(table.overrides) - before
        if replaced:
            logger.info(f"[merger] {source}: overrode {replaced} existing key(s)")
    logger.info(f"[merger] Merged {len(table)} keys ({len(table.overrides)} overrides)")
    return table
