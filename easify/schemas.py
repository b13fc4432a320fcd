"""
Pydantic models for JSON documents exchanged at the command line.

A pattern can be supplied as a JSON document instead of declaration text::

    {"slots": [{"name": "a"}, {"name": "b", "rest": true, "mutable": true}]}

Plans and bindings are serialized back through the same models so that the
CLI output has a stable, validated shape.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .pattern import Pattern, SlotSpec


class SchemaModel(BaseModel):
    """Base for all easify documents: unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class SlotSpecModel(SchemaModel):
    name: str = Field(..., description="Binding name")
    mutable: bool = Field(False, description="Binding may be rebound/mutated")
    rest: bool = Field(False, description="Slot absorbs the remaining elements")

    @field_validator("name")
    @classmethod
    def _name_is_identifier(cls, value: str) -> str:
        if not value.isidentifier():
            raise ValueError(f"'{value}' is not a valid slot name")
        return value

    def to_spec(self) -> SlotSpec:
        return SlotSpec(name=self.name, mutable=self.mutable, is_rest=self.rest)


class PatternDocument(SchemaModel):
    slots: List[SlotSpecModel] = Field(..., min_length=1)

    def to_specs(self) -> List[SlotSpec]:
        return [slot.to_spec() for slot in self.slots]


class SlotModel(SchemaModel):
    name: str
    mutable: bool
    role: str
    position: int


class CompiledPatternModel(SchemaModel):
    declaration: str
    arity: int
    rest_index: Optional[int]
    minimum_length: int
    slots: List[SlotModel]

    @classmethod
    def from_pattern(cls, pattern: Pattern) -> "CompiledPatternModel":
        return cls(
            declaration=pattern.describe(),
            arity=pattern.arity,
            rest_index=pattern.rest_index,
            minimum_length=pattern.minimum_length,
            slots=[
                SlotModel(
                    name=slot.name,
                    mutable=slot.mutable,
                    role=str(slot.role),
                    position=slot.position,
                )
                for slot in pattern.slots
            ],
        )


class AssignmentModel(SchemaModel):
    name: str
    role: str
    index: Optional[int] = None
    start: Optional[int] = None
    stop: Optional[int] = None


class PlanModel(SchemaModel):
    declaration: str
    length: int
    assignments: List[AssignmentModel]


class BindingModel(SchemaModel):
    name: str
    role: str
    mutable: bool
    value: Any


class BindingsModel(SchemaModel):
    declaration: str
    bindings: List[BindingModel]


__all__ = [
    "AssignmentModel",
    "BindingModel",
    "BindingsModel",
    "CompiledPatternModel",
    "PatternDocument",
    "PlanModel",
    "SlotModel",
    "SlotSpecModel",
]
