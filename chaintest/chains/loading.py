"""Loading of type namers from entry points."""

from importlib.metadata import entry_points

from chaintest.chains.naming import TypeNamer, qualified_type_name, short_type_name
from chaintest.errors import TypeNamerNotFoundError

ENTRY_POINT_GROUP = "chaintest.type_namers"

# Also registered as entry points; kept here so running from a source
# checkout works without installing the package.
BUILTIN_TYPE_NAMERS: dict[str, TypeNamer] = {
    "qualified": qualified_type_name,
    "short": short_type_name,
}


def load_type_namer(key: str) -> TypeNamer:
    """Load a type namer by key.

    Args:
        key: The namer key as registered in pyproject.toml
             (e.g., "qualified", "short")

    Returns:
        The type namer callable

    Raises:
        TypeNamerNotFoundError: If no namer with the given key is found

    """
    if key in BUILTIN_TYPE_NAMERS:
        return BUILTIN_TYPE_NAMERS[key]

    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            namer: TypeNamer = entry.load()
            return namer

    available = sorted({*BUILTIN_TYPE_NAMERS, *(e.name for e in entries)})
    raise TypeNamerNotFoundError(
        f"Type namer '{key}' not found. Available type namers: {available}"
    )
