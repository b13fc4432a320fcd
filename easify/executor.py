"""Unpacking executor: maps a compiled :class:`Pattern` onto a sequence."""

from __future__ import annotations

from collections.abc import Mapping, MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .compiler import SlotSpecsLike, cached_compile
from .errors import ArityMismatch, ImmutableBindingError, InsufficientElements
from .observability.logging import get_logger, log_unpack_failure
from .pattern import Pattern, Slot, SlotRole

logger = get_logger("easify.executor")


@dataclass(frozen=True)
class SlotAssignment:
    """Where one slot reads from: a single index, or a ``[start, stop)`` range."""

    slot: Slot
    index: Optional[int] = None
    start: Optional[int] = None
    stop: Optional[int] = None

    @property
    def is_range(self) -> bool:
        return self.slot.role is SlotRole.REST

    def as_slice(self) -> slice:
        if self.is_range:
            return slice(self.start, self.stop)
        return slice(self.index, self.index + 1)

    @property
    def size(self) -> int:
        if self.is_range:
            return self.stop - self.start
        return 1


class SequenceView(Sequence):
    """Read-only window over ``[start, stop)`` of another sequence."""

    __slots__ = ("_source", "_start", "_stop")

    def __init__(self, source: Sequence, start: int, stop: int) -> None:
        self._source = source
        self._start = start
        self._stop = stop

    def __len__(self) -> int:
        return self._stop - self._start

    def __getitem__(self, index):
        if isinstance(index, slice):
            start, stop, step = index.indices(len(self))
            if step != 1:
                return [self[i] for i in range(start, stop, step)]
            stop = max(start, stop)
            return SequenceView(self._source, self._start + start, self._start + stop)
        length = len(self)
        if index < 0:
            index += length
        if not 0 <= index < length:
            raise IndexError("SequenceView index out of range")
        return self._source[self._start + index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SequenceView, list, tuple)):
            return len(self) == len(other) and all(a == b for a, b in zip(self, other))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> List[Any]:
        return list(self)

    def __repr__(self) -> str:
        return f"SequenceView({list(self)!r})"


class BindingResult:
    """
    The bindings produced by one unpacking call.

    Values can be read by name (``result["b"]`` or ``result.b``), by slot
    position (``result[0]``), or destructured in slot order
    (``a, b, c = result``). When a name repeats, lookup by name resolves to the
    last slot carrying it.

    Slots named like a member of this class (``pattern``, ``names``,
    ``items``, ``as_dict`` or ``is_mutable``) are reachable only by
    subscription; attribute access returns the member and assigning to it
    raises ``AttributeError``.
    """

    __slots__ = ("_pattern", "_values")

    _RESERVED = frozenset({"pattern", "names", "items", "as_dict", "is_mutable"})

    def __init__(self, pattern: Pattern, values: List[Any]) -> None:
        object.__setattr__(self, "_pattern", pattern)
        object.__setattr__(self, "_values", values)

    @property
    def pattern(self) -> Pattern:
        return self._pattern

    @property
    def names(self) -> Tuple[str, ...]:
        return self._pattern.names

    def _position(self, name: str) -> int:
        for slot in reversed(self._pattern.slots):
            if slot.name == name:
                return slot.position
        raise KeyError(name)

    def __getitem__(self, key: Union[str, int]) -> Any:
        if isinstance(key, str):
            return self._values[self._position(key)]
        return self._values[key]

    def __setitem__(self, key: Union[str, int], value: Any) -> None:
        position = self._position(key) if isinstance(key, str) else range(len(self._values))[key]
        slot = self._pattern.slots[position]
        if not slot.mutable:
            raise ImmutableBindingError(
                f"Slot '{slot.name}' is not mutable",
                hint=f"Declare it as 'mut {slot.name}' to allow rebinding",
            )
        self._values[position] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"No slot named '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._RESERVED:
            raise AttributeError(
                f"'{name}' is a BindingResult member; assign the slot with result['{name}']"
            )
        try:
            self[name] = value
        except KeyError:
            raise AttributeError(f"No slot named '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._pattern.names

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BindingResult):
            return NotImplemented
        return self._pattern == other._pattern and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def is_mutable(self, name: str) -> bool:
        return self._pattern.slots[self._position(name)].mutable

    def items(self) -> List[Tuple[str, Any]]:
        return [(slot.name, value) for slot, value in zip(self._pattern.slots, self._values)]

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.items())

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self.items())
        return f"BindingResult({inner})"


def _rejected(pattern: Pattern, length: int, error: Exception) -> Exception:
    log_unpack_failure(
        pattern=pattern.describe(),
        length=length,
        reason=type(error).__name__,
        logger=logger,
    )
    return error


def plan(pattern: Pattern, length: int) -> List[SlotAssignment]:
    """
    Compute, for every slot, the index or range it binds in a sequence of
    ``length`` elements.

    Raises:
        InsufficientElements: rest-bearing pattern and ``length < arity - 1``.
        ArityMismatch: rest-free pattern and ``length != arity``.
    """
    k = pattern.arity
    n = length

    if pattern.rest_index is None:
        if n != k:
            raise _rejected(pattern, n, ArityMismatch(expected=k, actual=n))
        return [SlotAssignment(slot=slot, index=slot.position) for slot in pattern.slots]

    if n < k - 1:
        raise _rejected(pattern, n, InsufficientElements(minimum=k - 1, actual=n))

    r = pattern.rest_index
    assignments: List[SlotAssignment] = []
    for slot in pattern.slots:
        i = slot.position
        if i < r:
            assignments.append(SlotAssignment(slot=slot, index=i))
        elif i == r:
            assignments.append(SlotAssignment(slot=slot, start=r, stop=n - k + r + 1))
        else:
            assignments.append(SlotAssignment(slot=slot, index=n - k + i))
    return assignments


def _is_array_like(sequence: Any) -> bool:
    return hasattr(sequence, "__array__") and hasattr(sequence, "__len__")


def _length_of(sequence: Any) -> int:
    # Mappings are rejected even with integer keys; numpy-style arrays are accepted.
    if isinstance(sequence, Mapping):
        raise TypeError(
            f"Cannot unpack {type(sequence).__name__!r}: mappings are not positional sequences"
        )
    if not (isinstance(sequence, Sequence) or _is_array_like(sequence)):
        raise TypeError(
            f"Cannot unpack {type(sequence).__name__!r}: a sized, indexable sequence is required"
        )
    return len(sequence)


def _materialize_rest(sequence: Any, assignment: SlotAssignment, *, consume: bool) -> Any:
    start, stop = assignment.start, assignment.stop
    if isinstance(sequence, (str, bytes)):
        if not assignment.slot.mutable:
            return sequence[start:stop]
        if isinstance(sequence, bytes):
            return bytearray(sequence[start:stop])
    if assignment.slot.mutable:
        return [sequence[i] for i in range(start, stop)]
    if consume:
        return tuple(sequence[i] for i in range(start, stop))
    return SequenceView(sequence, start, stop)


def _bind(pattern: Pattern, sequence: Any, *, consume: bool) -> BindingResult:
    assignments = plan(pattern, _length_of(sequence))
    values: List[Any] = []
    for assignment in assignments:
        if assignment.is_range:
            values.append(_materialize_rest(sequence, assignment, consume=consume))
        else:
            values.append(sequence[assignment.index])
    return BindingResult(pattern, values)


def unpack(pattern: Pattern, sequence: Any) -> BindingResult:
    """
    Borrowing unpack: bind every slot of ``pattern`` against ``sequence``.

    The source is never modified. An immutable rest slot is a zero-copy
    :class:`SequenceView` and stays valid only while the source is unchanged;
    a ``mut`` rest slot is an independent ``list``. ``str`` and ``bytes``
    sources bind an immutable rest as a slice of the same type, so
    ``unpack(compile_pattern("a, *b, c"), "abcd").b == "bc"``; a ``mut`` rest
    over ``bytes`` is a ``bytearray``.

    Raises:
        TypeError: ``sequence`` is a mapping, or is not a sized, indexable
            sequence or numpy-style array.
    """
    return _bind(pattern, sequence, consume=False)


def unpack_consuming(pattern: Pattern, sequence: Any) -> BindingResult:
    """
    Consuming unpack: bind every slot, then release the source.

    Every binding is owned (a ``mut`` rest slot is a ``list``, an immutable
    one a ``tuple``, or a slice for ``str`` and ``bytes``). A mutable source is emptied in place once all slots are
    bound and must not be used afterwards. On failure the source is untouched.
    """
    result = _bind(pattern, sequence, consume=True)
    if isinstance(sequence, MutableSequence):
        del sequence[:]
    return result


def let_unpack(declaration: SlotSpecsLike, sequence: Any, *, consume: bool = False) -> BindingResult:
    """
    Compile ``declaration`` through the pattern cache and unpack ``sequence``.

    >>> a, b, c = let_unpack("a, *b, c", [5, 6, 3, 7])
    >>> (a, list(b), c)
    (5, [6, 3], 7)
    """
    pattern = cached_compile(declaration)
    if consume:
        return unpack_consuming(pattern, sequence)
    return unpack(pattern, sequence)


__all__ = [
    "BindingResult",
    "SequenceView",
    "SlotAssignment",
    "let_unpack",
    "plan",
    "unpack",
    "unpack_consuming",
]
