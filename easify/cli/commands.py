"""
Subcommand implementations for the easify CLI.

Each ``cmd_*`` function receives the parsed :class:`argparse.Namespace`,
prints its result as JSON on stdout and lets errors propagate to
:func:`easify.cli.main`, which formats them and chooses the exit status.
"""

import argparse
import json
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from easify.compiler import cached_compile
from easify.executor import SequenceView, plan, unpack, unpack_consuming
from easify.pattern import Pattern
from easify.schemas import (
    AssignmentModel,
    BindingModel,
    BindingsModel,
    CompiledPatternModel,
    PatternDocument,
    PlanModel,
)
from easify.tuples import dynamic_tuple, split_exact

from .errors import CLIFileError, CLIValidationError


def load_pattern(args: argparse.Namespace) -> Pattern:
    """Compile the pattern given by ``--pattern`` text or a ``--slots-file`` document."""
    slots_file = getattr(args, "slots_file", None)
    if slots_file:
        path = Path(slots_file)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CLIFileError(
                f"Cannot read slots file '{path}': {exc.strerror or exc}",
                context={"path": str(path)},
            ) from exc
        try:
            document = PatternDocument.model_validate_json(content)
        except ValidationError as exc:
            raise CLIValidationError(
                f"Invalid slots file '{path}': {exc.error_count()} validation error(s)",
                hint="Expected {\"slots\": [{\"name\": ..., \"mutable\": ..., \"rest\": ...}]}",
                context={"errors": exc.errors(include_url=False)},
            ) from exc
        return cached_compile(document.to_specs())
    return cached_compile(args.pattern)


def load_json_array(text: str) -> List[Any]:
    try:
        value = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CLIValidationError(
            f"Sequence is not valid JSON: {exc.msg}",
            hint="Pass a JSON array such as '[1, 2, 3]'",
        ) from exc
    if not isinstance(value, list):
        raise CLIValidationError(
            f"Sequence must be a JSON array, got {type(value).__name__}",
            hint="Pass a JSON array such as '[1, 2, 3]'",
        )
    return value


def parse_scalar(text: str) -> Any:
    """Interpret ``text`` as JSON when possible, otherwise as a plain string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _jsonable(value: Any) -> Any:
    if isinstance(value, (SequenceView, tuple)):
        return list(value)
    return value


def cmd_compile(args: argparse.Namespace) -> None:
    pattern = load_pattern(args)
    print(CompiledPatternModel.from_pattern(pattern).model_dump_json(indent=2))


def cmd_plan(args: argparse.Namespace) -> None:
    if args.length < 0:
        raise CLIValidationError(f"Length must not be negative, got {args.length}")
    pattern = load_pattern(args)
    assignments = plan(pattern, args.length)
    document = PlanModel(
        declaration=pattern.describe(),
        length=args.length,
        assignments=[
            AssignmentModel(
                name=item.slot.name,
                role=str(item.slot.role),
                index=item.index,
                start=item.start,
                stop=item.stop,
            )
            for item in assignments
        ],
    )
    print(document.model_dump_json(indent=2))


def cmd_unpack(args: argparse.Namespace) -> None:
    pattern = load_pattern(args)
    sequence = load_json_array(args.sequence)
    result = unpack_consuming(pattern, sequence) if args.consume else unpack(pattern, sequence)
    document = BindingsModel(
        declaration=pattern.describe(),
        bindings=[
            BindingModel(
                name=slot.name,
                role=str(slot.role),
                mutable=slot.mutable,
                value=_jsonable(value),
            )
            for slot, value in zip(pattern.slots, result)
        ],
    )
    print(document.model_dump_json(indent=2))


def cmd_tuple(args: argparse.Namespace) -> None:
    print(json.dumps(list(dynamic_tuple(parse_scalar(args.value), args.count))))


def cmd_split(args: argparse.Namespace) -> None:
    print(json.dumps(list(split_exact(args.text, args.delimiter, args.count))))


__all__ = [
    "cmd_compile",
    "cmd_plan",
    "cmd_split",
    "cmd_tuple",
    "cmd_unpack",
    "load_json_array",
    "load_pattern",
    "parse_scalar",
]
