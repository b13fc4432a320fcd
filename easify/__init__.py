"""
easify – structural sequence unpacking.

Generalizes ``a, *b, c = seq`` into a reusable, validated binding program.
A slot list such as ``"a, *b, mut c"`` is compiled once into an immutable
:class:`~easify.pattern.Pattern`; the executor then maps that pattern onto
any sized, indexable sequence and returns a
:class:`~easify.executor.BindingResult`::

    >>> import easify
    >>> pattern = easify.compile("a, *b, c")
    >>> a, b, c = easify.unpack(pattern, [5, 6, 3, 7])
    >>> a, list(b), c
    (5, [6, 3], 7)

The code is organised into several modules:

* ``pattern`` – the slot and pattern data model.
* ``syntax`` – parser for textual slot declarations.
* ``compiler`` – validates slot lists and caches compiled patterns.
* ``executor`` – index arithmetic plus borrowing and consuming unpack.
* ``tuples`` – fixed-arity helpers (repeat a value, split into K parts).
* ``config`` / ``observability`` – settings and logging.
* ``cli`` – the ``easify`` command.
"""

from .compiler import PatternCache, cached_compile, compile_pattern
from .errors import (
    ArityMismatch,
    EasifyError,
    ImmutableBindingError,
    InsufficientElements,
    MalformedPattern,
    SlotSyntaxError,
    UnpackError,
)
from .executor import (
    BindingResult,
    SequenceView,
    SlotAssignment,
    let_unpack,
    plan,
    unpack,
    unpack_consuming,
)
from .pattern import Pattern, Slot, SlotRole, SlotSpec
from .syntax import parse_slots, parse_unpack_statement
from .tuples import dynamic_tuple, split_exact

__version__ = "0.1.0"

compile = compile_pattern

__all__ = [
    "__version__",
    "ArityMismatch",
    "BindingResult",
    "EasifyError",
    "ImmutableBindingError",
    "InsufficientElements",
    "MalformedPattern",
    "Pattern",
    "PatternCache",
    "SequenceView",
    "Slot",
    "SlotAssignment",
    "SlotRole",
    "SlotSpec",
    "SlotSyntaxError",
    "UnpackError",
    "cached_compile",
    "compile",
    "compile_pattern",
    "dynamic_tuple",
    "let_unpack",
    "parse_slots",
    "parse_unpack_statement",
    "plan",
    "split_exact",
    "unpack",
    "unpack_consuming",
]
