# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable annotation values.

Everywhere in scenelib, field values are represented as follows:

- Primitive value: ``bool``, ``int`` or ``float``.
- String: ``str``.
- Type token: the type name as a ``str``, using ``int[]`` notation for arrays.
- Enumeration constant: the constant's name as a ``str``.
- Subannotation: a :class:`SceneAnnotation`.
- Array: a ``tuple`` of elements in the formats above. If the element type is
  unknown, the array must be empty.

Lists are accepted wherever an array is expected and are frozen into tuples
when an annotation is constructed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import total_ordering
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from scenelib.model.errors import InvalidAnnotationError, RepresentationViolation
from scenelib.model.types import AnnotationDef, freeze_value, render_value

if TYPE_CHECKING:
    from scenelib.ingest.introspection import TypeIntrospector
    from scenelib.model.pool import DefinitionPool

# ###############
# Public Interface
# ###############


@total_ordering
@dataclass(frozen=True, eq=False, repr=False)
class SceneAnnotation:
    """An annotation: a definition plus a read-only mapping of field values.

    Construction copies *field_values*, so the caller may keep mutating its
    own mapping. The definition is shared, never copied.

    Two annotations are equal when their definitions have the same name and
    their field values are recursively equal, regardless of how they were
    built. Annotations are ordered by their string rendering.

    Attributes:
        definition: The definition of the annotation type.
        field_values: Field name to canonical value, in construction order.

    Raises:
        InvalidAnnotationError: If the field values do not match the definition.
    """

    definition: AnnotationDef
    field_values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        values = MappingProxyType({name: freeze_value(value) for name, value in self.field_values.items()})
        object.__setattr__(self, "field_values", values)
        violations = validate(self.definition, values)
        if violations:
            raise InvalidAnnotationError(self.definition.name, violations)

    @classmethod
    def from_native(
        cls,
        instance: object,
        pool: DefinitionPool,
        introspector: TypeIntrospector | None = None,
    ) -> SceneAnnotation:
        """Ingest a native annotation instance, see :func:`scenelib.ingest.from_native`."""
        from scenelib.ingest.ingestor import from_native

        return from_native(instance, pool, introspector)

    def get_field_value(self, field_name: str, *, include_defaults: bool = False) -> Any:
        """Return the stored value of *field_name*, or ``None`` if it is absent.

        With *include_defaults*, an absent field falls back to the
        definition's default.
        """
        if field_name in self.field_values:
            return self.field_values[field_name]
        if include_defaults:
            return self.definition.defaults.get(field_name)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SceneAnnotation):
            return NotImplemented
        return self.definition == other.definition and dict(self.field_values) == dict(other.field_values)

    def __hash__(self) -> int:
        return hash(self.definition) + hash(frozenset(self.field_values.items()))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SceneAnnotation):
            return NotImplemented
        return str(self) < str(other)

    def __str__(self) -> str:
        if not self.field_values:
            return f"@{self.definition.name}"
        rendered = ", ".join(f"{name}={render_value(value)}" for name, value in self.field_values.items())
        return f"@{self.definition.name}({rendered})"

    def __repr__(self) -> str:
        return f"SceneAnnotation({self})"


def validate(definition: AnnotationDef, field_values: Mapping[str, Any]) -> list[RepresentationViolation]:
    """Check field values against an annotation definition.

    Checks performed:
    - Every field with a value is declared by the definition.
    - Every declared field without a value has a default.
    - Every value satisfies its field's descriptor.

    Args:
        definition: The definition to check against.
        field_values: Field name to candidate value.

    Returns:
        A list of :class:`RepresentationViolation` records. An empty list
        means the values are valid for the definition.
    """
    violations: list[RepresentationViolation] = []

    for field_name, value in field_values.items():
        field_type = definition.field_types.get(field_name)
        if field_type is None:
            violations.append(
                RepresentationViolation(
                    field_name=field_name,
                    value=value,
                    expected=None,
                    message=f"annotation contains field '{field_name}' but @{definition.name} does not",
                )
            )
        elif not field_type.is_valid_value(value):
            violations.append(
                RepresentationViolation(
                    field_name=field_name,
                    value=value,
                    expected=str(field_type),
                    message=(
                        f"bad value {_describe(value)} for field '{field_name}' "
                        f"({field_type}) in @{definition.name}"
                    ),
                )
            )

    for field_name, field_type in definition.field_types.items():
        if field_name not in field_values and not definition.has_default(field_name):
            violations.append(
                RepresentationViolation(
                    field_name=field_name,
                    value=None,
                    expected=str(field_type),
                    message=f"field '{field_name}' of @{definition.name} has no value and no default",
                )
            )

    return violations


# ################
# Implementation
# ################


def _describe(value: Any) -> str:
    """Render a value with its runtime type, and its element types for sequences."""
    if isinstance(value, (list, tuple)):
        element_types = " ".join(type(element).__name__ for element in value)
        return f"{value!r} ({type(value).__name__} {{{element_types}}})"
    return f"{value!r} ({type(value).__name__})"
