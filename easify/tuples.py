"""Small fixed-arity tuple builders."""

from __future__ import annotations

from itertools import islice, repeat
from typing import Any, Tuple

from .errors import InsufficientElements


def dynamic_tuple(value: Any, count: int) -> Tuple[Any, ...]:
    """
    Return a tuple holding ``value`` repeated ``count`` times.

    >>> dynamic_tuple(5, 3)
    (5, 5, 5)
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"Invalid count of elements: {count!r}")
    if count < 0:
        raise ValueError(f"Count of elements must not be negative, got {count}")
    return tuple(repeat(value, count))


def split_exact(text: str, delimiter: str, count: int) -> Tuple[str, ...]:
    """
    Return the first ``count`` pieces of ``text`` split on ``delimiter``.

    Pieces beyond ``count`` are ignored. Fewer pieces than ``count`` raise
    :class:`InsufficientElements`.

    >>> split_exact("host:8080:extra", ":", 2)
    ('host', '8080')
    """
    if not delimiter:
        raise ValueError("Delimiter must not be empty")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise ValueError(f"Invalid count of parts: {count!r}")
    pieces = text.split(delimiter)
    if len(pieces) < count:
        raise InsufficientElements(
            minimum=count,
            actual=len(pieces),
            hint=f"Expected {count} part(s) separated by {delimiter!r}",
        )
    return tuple(islice(pieces, count))


__all__ = ["dynamic_tuple", "split_exact"]
