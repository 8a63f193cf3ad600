"""Human-readable type tags for raised errors."""

from collections.abc import Callable

type TypeNamer = Callable[[BaseException], str]


def qualified_type_name(error: BaseException) -> str:
    """Return ``module.QualName`` for the error's type, or just the name for builtins."""
    error_type = type(error)
    if error_type.__module__ == "builtins":
        return error_type.__qualname__
    return f"{error_type.__module__}.{error_type.__qualname__}"


def short_type_name(error: BaseException) -> str:
    """Return the error type's qualified name without its module."""
    return type(error).__qualname__
