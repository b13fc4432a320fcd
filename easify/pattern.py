"""Data model for compiled unpacking patterns."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple


class SlotRole(str, Enum):
    """Where a slot sits relative to the rest slot."""

    HEAD = "head"
    REST = "rest"
    TAIL = "tail"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SlotSpec:
    """One requested binding, as produced by a front-end."""

    name: str
    mutable: bool = False
    is_rest: bool = False

    @classmethod
    def coerce(cls, item: Any) -> "SlotSpec":
        """
        Normalize ``item`` into a :class:`SlotSpec`.

        Accepts an existing spec, a bare name, or a ``(name, mutable)`` /
        ``(name, mutable, is_rest)`` tuple.
        """
        if isinstance(item, SlotSpec):
            return item
        if isinstance(item, str):
            return cls(name=item)
        if isinstance(item, (tuple, list)) and 1 <= len(item) <= 3:
            name = item[0]
            if not isinstance(name, str):
                raise TypeError(f"Slot name must be a string, got {type(name).__name__}")
            flags = tuple(item[1:])
            for flag in flags:
                if not isinstance(flag, bool):
                    raise TypeError(
                        f"Slot flags for '{name}' must be bool, got {type(flag).__name__}"
                    )
            mutable, is_rest = flags + (False,) * (2 - len(flags))
            return cls(name=name, mutable=mutable, is_rest=is_rest)
        raise TypeError(f"Cannot interpret {item!r} as a slot spec")

    def describe(self) -> str:
        prefix = "mut " if self.mutable else ""
        marker = "*" if self.is_rest else ""
        return f"{prefix}{marker}{self.name}"


@dataclass(frozen=True)
class Slot:
    """A compiled slot: a spec with its resolved position and role."""

    name: str
    mutable: bool
    role: SlotRole
    position: int

    @property
    def is_rest(self) -> bool:
        return self.role is SlotRole.REST

    def describe(self) -> str:
        prefix = "mut " if self.mutable else ""
        marker = "*" if self.is_rest else ""
        return f"{prefix}{marker}{self.name}"


@dataclass(frozen=True)
class Pattern:
    """
    An immutable, reusable unpacking program.

    ``slots`` keeps declaration order. ``rest_index`` is the position of the
    single rest slot, or ``None`` when every slot is a head slot and the
    pattern only accepts sequences of exactly ``arity`` elements.
    """

    slots: Tuple[Slot, ...]
    rest_index: Optional[int] = None

    @property
    def arity(self) -> int:
        return len(self.slots)

    @property
    def has_rest(self) -> bool:
        return self.rest_index is not None

    @property
    def minimum_length(self) -> int:
        if self.has_rest:
            return self.arity - 1
        return self.arity

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(slot.name for slot in self.slots)

    @property
    def head_slots(self) -> Tuple[Slot, ...]:
        return tuple(slot for slot in self.slots if slot.role is SlotRole.HEAD)

    @property
    def rest_slot(self) -> Optional[Slot]:
        if self.rest_index is None:
            return None
        return self.slots[self.rest_index]

    @property
    def tail_slots(self) -> Tuple[Slot, ...]:
        return tuple(slot for slot in self.slots if slot.role is SlotRole.TAIL)

    def describe(self) -> str:
        """Render the pattern back into its declaration form."""
        return ", ".join(slot.describe() for slot in self.slots)

    def __str__(self) -> str:
        return f"Pattern({self.describe()})"


__all__ = ["SlotRole", "SlotSpec", "Slot", "Pattern"]
