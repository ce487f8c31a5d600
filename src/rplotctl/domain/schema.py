"""Declarative field schemas and the parameter mapping engine.

A schema maps each logical input field to a :class:`FieldSpec` that says
where the value lands in the R call (positional slot or named argument),
what it must be, and how it is coerced. Schemas are read-only mappings
composed from reusable fragments with :func:`merge_schemas`.

Mapping pass, per field in declaration order:
  1. present = non-null input, or required, or positional slot
  2. normalize to a sequence (scalar -> [scalar]; a numeric triple for a
     Color field is one value, not three)
  3. array-type fields construct the domain type once from the whole sequence
  4. otherwise each element is auto-cast or strictly type-checked
  5. length 1 collapses to the element, length 0 to None
  6. absent fields with a default use ``type(default)``
  7. non-null values are routed to their slot or key
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from rplotctl.domain.errors import ValidationError
from rplotctl.domain.literals import RExpression, is_number, is_sequence
from rplotctl.domain.values import Color, LineType, LineWeight, PointType


class Primitive(StrEnum):
    """Plain input kinds checked strictly (never auto-cast)."""

    NUMBER = "number"
    INTEGER = "integer"
    TEXT = "text"
    BOOLEAN = "boolean"

    def accepts(self, value: Any) -> bool:
        if self is Primitive.NUMBER:
            return is_number(value)
        if self is Primitive.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is Primitive.TEXT:
            return isinstance(value, str)
        return isinstance(value, bool)


type FieldType = Primitive | type[RExpression]


@dataclass(frozen=True)
class FieldSpec:
    """How one logical input field maps onto an R call argument.

    Attributes:
        type: Primitive kind or domain class the value must be.
        pos: Positional slot index. Positional fields are always present.
        key: Named argument key. Fields with neither ``pos`` nor ``key`` are
            validated and kept for command-specific post-processing only.
        required: Missing input is a validation error.
        auto_cast: Construct ``type(element)`` instead of checking isinstance.
        array_type: Construct ``type(sequence)`` once from the whole input.
        default: Raw value constructed into ``type`` when the field is absent.
    """

    type: FieldType
    pos: int | None = None
    key: str | None = None
    required: bool = False
    auto_cast: bool = False
    array_type: bool = False
    default: Any = None

    def __post_init__(self) -> None:
        if self.pos is not None and self.key is not None:
            msg = "A field routes to a positional slot or a named key, not both"
            raise ValueError(msg)
        if isinstance(self.type, Primitive) and (self.auto_cast or self.array_type):
            msg = f"Primitive field type {self.type.value!r} cannot be auto-cast"
            raise ValueError(msg)


type Schema = Mapping[str, FieldSpec]


def merge_schemas(*fragments: Schema) -> Schema:
    """Key-union of schema fragments; later fragments win on conflicts.

    Field order follows first appearance, which fixes named-argument order
    in the generated call.
    """
    merged: dict[str, FieldSpec] = {}
    for fragment in fragments:
        merged.update(fragment)
    return MappingProxyType(merged)


# --- Reusable fragments ---

LINE_PARAMS: Schema = merge_schemas(
    {
        "color": FieldSpec(Color, key="col", auto_cast=True),
        "line_type": FieldSpec(LineType, key="lty", auto_cast=True),
        "line_weight": FieldSpec(LineWeight, key="lwd", auto_cast=True),
        "point_type": FieldSpec(PointType, key="pch", auto_cast=True, default="none"),
    }
)

XY_POINTS: Schema = merge_schemas(
    {
        "x": FieldSpec(Primitive.NUMBER, pos=0),
        "y": FieldSpec(Primitive.NUMBER, pos=1),
    }
)

XY_RANGE: Schema = merge_schemas(
    {
        "x_range": FieldSpec(Primitive.NUMBER, key="xlim"),
        "y_range": FieldSpec(Primitive.NUMBER, key="ylim"),
    }
)


@dataclass
class MappedArguments:
    """Validated output of :func:`map_parameters`.

    ``values`` holds every present field's final value by field name,
    including fields that have no slot or key.
    """

    positional: dict[int, Any] = field(default_factory=dict)
    named: dict[str, Any] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)


def _type_name(field_type: FieldType) -> str:
    if isinstance(field_type, Primitive):
        return field_type.value
    return field_type.__name__


def _construct(name: str, spec: FieldSpec, raw: Any, owner: str) -> RExpression:
    field_type = spec.type
    assert not isinstance(field_type, Primitive)
    try:
        return field_type(raw)
    except ValidationError as exc:
        msg = f"{owner}: invalid field {name!r}: {exc}"
        raise ValidationError(msg, field=name) from exc


def _coerce_element(name: str, spec: FieldSpec, element: Any, index: int, owner: str) -> Any:
    if spec.auto_cast:
        if isinstance(element, spec.type):  # type: ignore[arg-type]
            return element
        return _construct(name, spec, element, owner)
    if isinstance(spec.type, Primitive):
        accepted = spec.type.accepts(element)
    else:
        accepted = isinstance(element, spec.type)
    if not accepted:
        msg = (
            f"{owner}: field {name!r}[{index}] must be of type {_type_name(spec.type)}, "
            f"but was {type(element).__name__}"
        )
        raise ValidationError(msg, field=name)
    return element


def _normalize(name: str, spec: FieldSpec, raw: Any, owner: str) -> Any:
    if raw is None:
        msg = f"{owner}: missing required field {name!r}"
        raise ValidationError(msg, field=name)

    if spec.array_type and isinstance(raw, spec.type):  # type: ignore[arg-type]
        return raw

    if is_sequence(raw):
        elements = list(raw)
        if spec.type is Color and len(elements) == 3 and all(is_number(e) for e in elements):
            elements = [elements]
    else:
        elements = [raw]

    if spec.array_type:
        return _construct(name, spec, elements, owner)

    coerced = [
        _coerce_element(name, spec, element, index, owner)
        for index, element in enumerate(elements)
    ]
    if not coerced:
        return None
    if len(coerced) == 1:
        return coerced[0]
    for index, element in enumerate(coerced):
        if isinstance(element, RExpression) and element.is_null:
            msg = (
                f"{owner}: field {name!r} element {index} ({elements[index]!r}) leaves the R "
                "default and cannot appear in a list"
            )
            raise ValidationError(msg, field=name)
    return coerced


def map_parameters(raw: Mapping[str, Any], schema: Schema, *, owner: str) -> MappedArguments:
    """Validate and route *raw* input fields according to *schema*.

    Keys in *raw* that the schema does not declare are ignored.

    Raises:
        ValidationError: missing required field, strict type mismatch, or a
            domain value rejecting its input. ``exc.field`` names the field.
    """
    if not isinstance(raw, Mapping):
        msg = f"{owner}: input must be a mapping, got {type(raw).__name__}"
        raise ValidationError(msg)

    result = MappedArguments()
    for name, spec in schema.items():
        value = raw.get(name)
        if value is not None or spec.required or spec.pos is not None:
            value = _normalize(name, spec, value, owner)
        elif spec.default is not None:
            value = _construct(name, spec, spec.default, owner)

        if value is None:
            continue
        result.values[name] = value
        if spec.pos is not None:
            result.positional[spec.pos] = value
        elif spec.key is not None:
            result.named[spec.key] = value
    return result
