# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Field type descriptors and annotation definitions for the scene model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveType(Enum):
    """Primitive kinds a field may hold."""

    BOOL = "bool"
    INT = "int"
    FLOAT = "float"


class PrimitiveFieldType(BaseModel):
    """A boxed scalar: bool, int, or float."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveType

    def is_valid_value(self, value: object) -> bool:
        if self.primitive is PrimitiveType.BOOL:
            return isinstance(value, bool)
        if self.primitive is PrimitiveType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, float)

    def __str__(self) -> str:
        return self.primitive.value


class StringFieldType(BaseModel):
    """A plain string."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"

    def is_valid_value(self, value: object) -> bool:
        return isinstance(value, str)

    def __str__(self) -> str:
        return "str"


class ClassTokenFieldType(BaseModel):
    """A type token, held as its rendered type name (e.g. ``int[]``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["class-token"] = "class-token"

    def is_valid_value(self, value: object) -> bool:
        return isinstance(value, str)

    def __str__(self) -> str:
        return "type"


class EnumFieldType(BaseModel):
    """An enumeration constant, held as the constant's name.

    Attributes:
        type_name: Name of the enumeration type.
        constants: Names of the legal constants, or ``None`` when unknown. When
            unknown, any string is accepted.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["enum"] = "enum"
    type_name: str
    constants: tuple[str, ...] | None = None

    def is_valid_value(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        return self.constants is None or value in self.constants

    def __str__(self) -> str:
        return f"enum {self.type_name}"


class AnnotationFieldType(BaseModel):
    """A nested annotation of the given definition."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["annotation"] = "annotation"
    definition: AnnotationDef

    def is_valid_value(self, value: object) -> bool:
        from scenelib.model.annotation import SceneAnnotation

        return isinstance(value, SceneAnnotation) and value.definition == self.definition

    def __str__(self) -> str:
        return f"annotation-field {self.definition.name}"


# Descriptors that may appear as array elements.
ScalarFieldType = Annotated[
    PrimitiveFieldType | StringFieldType | ClassTokenFieldType | EnumFieldType | AnnotationFieldType,
    _Field(discriminator="kind"),
]


class ArrayFieldType(BaseModel):
    """An ordered sequence of scalar values.

    An ``element_type`` of ``None`` means the element type is unknown; only
    the empty sequence is valid then.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element_type: ScalarFieldType | None = None

    def is_valid_value(self, value: object) -> bool:
        if not isinstance(value, (list, tuple)):
            return False
        if self.element_type is None:
            return len(value) == 0
        return all(self.element_type.is_valid_value(element) for element in value)

    def __str__(self) -> str:
        if self.element_type is None:
            return "unknown[]"
        return f"{self.element_type}[]"


# A field type descriptor: any scalar descriptor or an array of scalars.
# The `kind` discriminator field enables fast, unambiguous validation.
FieldType = Annotated[
    PrimitiveFieldType
    | StringFieldType
    | ClassTokenFieldType
    | EnumFieldType
    | AnnotationFieldType
    | ArrayFieldType,
    _Field(discriminator="kind"),
]


class AnnotationDef(BaseModel):
    """The schema of an annotation type.

    Two definitions are the same schema when their names are equal; equality
    and hashing look at ``name`` only.

    Attributes:
        name: Globally unique name of the annotation type.
        field_types: Ordered mapping from field name to its descriptor.
        defaults: Canonical default values for fields that declare one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    field_types: dict[str, FieldType] = _Field(default_factory=dict)
    defaults: dict[str, Any] = _Field(default_factory=dict)

    @field_validator("defaults", mode="after")
    @classmethod
    def freeze_defaults(cls, defaults: dict[str, Any]) -> dict[str, Any]:
        # Defaults are shared by every annotation of this type.
        return {field_name: freeze_value(value) for field_name, value in defaults.items()}

    @model_validator(mode="after")
    def check_defaults(self) -> AnnotationDef:
        for field_name, value in self.defaults.items():
            field_type = self.field_types.get(field_name)
            if field_type is None:
                raise ValueError(f"default given for undeclared field '{field_name}' of '{self.name}'")
            if not field_type.is_valid_value(value):
                raise ValueError(
                    f"default {value!r} of field '{field_name}' in '{self.name}' is not a valid {field_type}"
                )
        return self

    def has_default(self, field_name: str) -> bool:
        """Return True if *field_name* declares a default value."""
        return field_name in self.defaults

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AnnotationDef) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        lines = [f"@{self.name}"]
        for field_name, field_type in self.field_types.items():
            line = f"  {field_name}: {field_type}"
            if field_name in self.defaults:
                line += f" = {render_value(self.defaults[field_name])}"
            lines.append(line)
        return "\n".join(lines)


def freeze_value(value: Any) -> Any:
    """Return *value* with every list replaced by a tuple, recursively."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(element) for element in value)
    return value


def render_value(value: Any) -> str:
    """Render a canonical value the way it appears inside ``@Name(...)``."""
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(element) for element in value) + "]"
    return str(value)


# Resolve forward references for models that use FieldType or AnnotationDef.
AnnotationFieldType.model_rebuild()
ArrayFieldType.model_rebuild()
AnnotationDef.model_rebuild()
