"""Ordered fallback chains.

Each chain is an explicit sequence of candidates tried in order. A candidate
is either a value or a zero-argument callable; callables are only evaluated
when every earlier candidate was rejected.
"""

from typing import Any, Callable, Iterable, Optional


def is_non_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def first_of(
    candidates: Iterable[Any],
    accept: Callable[[Any], bool] = is_non_empty,
    default: Optional[Any] = None,
) -> Any:
    """Return the first candidate accepted by ``accept``, else ``default``."""
    for candidate in candidates:
        value = candidate() if callable(candidate) else candidate
        if accept(value):
            return value
    return default
