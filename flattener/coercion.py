import base64
from datetime import date

# Characters a single KEY=VALUE line cannot carry, even quoted.
_FORBIDDEN_CHARS = {
    "\n": "newline",
    "\r": "carriage return",
    "\x00": "NUL byte",
}


def coerce_value(node, null_policy: str = "empty") -> str | None:
    """Convert a leaf node into its env-file string form.

    Returns None only for a null leaf under the "omit" policy, meaning the
    leaf produces no entry. Raises ValueError for values that cannot live on
    one env-file line and TypeError for containers.
    """
    if node is None:
        return None if null_policy == "omit" else ""
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, int):
        return str(node)
    if isinstance(node, float):
        return repr(node)
    if isinstance(node, date):
        return node.isoformat()
    if isinstance(node, bytes):
        return base64.b64encode(node).decode("ascii")
    if isinstance(node, str):
        for char, name in _FORBIDDEN_CHARS.items():
            if char in node:
                raise ValueError(f"value contains a {name}")
        return node
    if isinstance(node, (dict, list)):
        raise TypeError(f"cannot coerce a {type(node).__name__} container")
    # !!set and !!pairs construct sets and tuples
    raise ValueError(f"unsupported YAML type {type(node).__name__}")
