from flattener.coercion import coerce_value
from flattener.errors import (
    ConfigReadError,
    EnvWriteError,
    InvalidDocumentRoot,
    InvalidKey,
    UnsupportedValue,
    Yaml2EnvError,
    YamlParseError,
)
from flattener.flattener import EnvEntry, flatten_document
from flattener.merger import EnvTable, Override, merge_sources

__all__ = [
    "ConfigReadError",
    "EnvEntry",
    "EnvTable",
    "EnvWriteError",
    "InvalidDocumentRoot",
    "InvalidKey",
    "Override",
    "UnsupportedValue",
    "Yaml2EnvError",
    "YamlParseError",
    "coerce_value",
    "flatten_document",
    "merge_sources",
]
