"""Pattern compiler: slot specs in, validated immutable :class:`Pattern` out."""

from __future__ import annotations

import threading
from collections import Counter, OrderedDict
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple, Union

from .config import get_settings
from .errors import MalformedPattern
from .observability.logging import get_logger
from .pattern import Pattern, Slot, SlotRole, SlotSpec
from .syntax import parse_slots

logger = get_logger("easify.compiler")

SlotSpecsLike = Union[str, Iterable[Any]]


def _normalize_specs(slot_specs: SlotSpecsLike) -> List[SlotSpec]:
    if isinstance(slot_specs, str):
        return parse_slots(slot_specs)
    return [SlotSpec.coerce(item) for item in slot_specs]


def compile_pattern(
    slot_specs: SlotSpecsLike,
    *,
    reject_duplicates: Optional[bool] = None,
) -> Pattern:
    """
    Compile an ordered slot list into a :class:`Pattern`.

    Args:
        slot_specs: A textual declaration (``"a, *b, mut c"``) or an iterable
            of :class:`SlotSpec`, names, or ``(name, mutable, is_rest)`` tuples.
        reject_duplicates: Treat repeated slot names as malformed. ``None``
            defers to the active settings.

    Raises:
        MalformedPattern: two or more slots carry the rest marker, or a name
            repeats while duplicates are rejected.
    """
    specs = _normalize_specs(slot_specs)

    rest_positions = [position for position, spec in enumerate(specs) if spec.is_rest]
    if len(rest_positions) > 1:
        raise MalformedPattern(
            f"Pattern declares {len(rest_positions)} rest slots; at most one is allowed",
            rest_positions=rest_positions,
            hint="Keep a single '*name' slot and bind the others individually",
        )

    if reject_duplicates is None:
        reject_duplicates = get_settings().reject_duplicate_names
    if reject_duplicates:
        repeated = sorted(name for name, count in Counter(spec.name for spec in specs).items() if count > 1)
        if repeated:
            raise MalformedPattern(
                f"Pattern binds the same name more than once: {', '.join(repeated)}",
                rest_positions=rest_positions,
            )

    rest_index = rest_positions[0] if rest_positions else None
    boundary = rest_index if rest_index is not None else len(specs)

    slots: List[Slot] = []
    for position, spec in enumerate(specs):
        if position < boundary:
            role = SlotRole.HEAD
        elif position == boundary:
            role = SlotRole.REST
        else:
            role = SlotRole.TAIL
        slots.append(Slot(name=spec.name, mutable=spec.mutable, role=role, position=position))

    pattern = Pattern(slots=tuple(slots), rest_index=rest_index)
    logger.debug("Compiled %s (arity=%d, rest_index=%s)", pattern, pattern.arity, rest_index)
    return pattern


def _cache_key(slot_specs: SlotSpecsLike, reject_duplicates: bool) -> Tuple[Hashable, bool]:
    if isinstance(slot_specs, str):
        return slot_specs, reject_duplicates
    return tuple(SlotSpec.coerce(item) for item in slot_specs), reject_duplicates


class PatternCache:
    """
    Bounded LRU cache of compiled patterns.

    Keys are the declaration text, or the normalized spec tuple for
    non-text input. A ``max_entries`` of zero disables caching.
    """

    def __init__(self, max_entries: Optional[int] = None):
        self._max_entries = max_entries
        self._cache: "OrderedDict[Tuple[Hashable, bool], Pattern]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def max_entries(self) -> int:
        if self._max_entries is not None:
            return self._max_entries
        return get_settings().pattern_cache_size

    def get_or_compile(
        self,
        slot_specs: SlotSpecsLike,
        *,
        reject_duplicates: Optional[bool] = None,
    ) -> Pattern:
        if reject_duplicates is None:
            reject_duplicates = get_settings().reject_duplicate_names
        if not isinstance(slot_specs, str):
            slot_specs = list(slot_specs)
        key = _cache_key(slot_specs, reject_duplicates)

        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                self._hits += 1
                return cached
            self._misses += 1

        pattern = compile_pattern(slot_specs, reject_duplicates=reject_duplicates)

        limit = self.max_entries
        if limit <= 0:
            return pattern
        with self._lock:
            self._cache[key] = pattern
            self._cache.move_to_end(key)
            while len(self._cache) > limit:
                self._cache.popitem(last=False)
        return pattern

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        return len(self._cache)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            total = self._hits + self._misses
            return {
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": self._hits / total if total > 0 else 0.0,
                "max_entries": self.max_entries,
            }


_DEFAULT_CACHE = PatternCache()


def default_cache() -> PatternCache:
    return _DEFAULT_CACHE


def cached_compile(slot_specs: SlotSpecsLike, *, reject_duplicates: Optional[bool] = None) -> Pattern:
    """Compile through the process-wide :class:`PatternCache`."""
    return _DEFAULT_CACHE.get_or_compile(slot_specs, reject_duplicates=reject_duplicates)


__all__ = [
    "PatternCache",
    "cached_compile",
    "compile_pattern",
    "default_cache",
]
