"""Errors raised while building an env file. All of them abort the run."""


class Yaml2EnvError(Exception):
    """Base class for every fatal yaml2env error."""

    def __init__(self, message: str, file=None, path: str | None = None):
        self.file = str(file) if file is not None else None
        self.path = path
        self.reason = message
        super().__init__(self._format(message))

    def _format(self, message: str) -> str:
        where = []
        if self.file:
            where.append(f"file={self.file}")
        if self.path:
            where.append(f"path={self.path}")
        return f"{message} ({', '.join(where)})" if where else message


class ConfigReadError(Yaml2EnvError):
    """The list-of-files config could not be read or parsed."""


class YamlParseError(Yaml2EnvError):
    """A source file could not be read or is not valid YAML."""


class InvalidDocumentRoot(Yaml2EnvError):
    """A source document's root node is not a mapping."""


class InvalidKey(Yaml2EnvError):
    """A key path normalizes to an empty or otherwise invalid env key."""


class UnsupportedValue(Yaml2EnvError):
    """A leaf value cannot be represented on a single env-file line."""


class EnvWriteError(Yaml2EnvError):
    """The output env file could not be written."""
