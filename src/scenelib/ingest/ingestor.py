# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of native annotation instances into scene annotations.

Ingestion resolves (or builds) the definition of the instance's type through
a :class:`~scenelib.model.pool.DefinitionPool`, reads each declared field,
coerces the raw value into the canonical value algebra, and constructs a
:class:`~scenelib.model.annotation.SceneAnnotation`. It either produces a
fully valid annotation or raises; there are no partial results.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import ValidationError

from scenelib.ingest.introspection import ReflectiveIntrospector, TypeIntrospector, render_native
from scenelib.model.annotation import SceneAnnotation
from scenelib.model.errors import DefinitionError, IngestionError
from scenelib.model.pool import DefinitionPool
from scenelib.model.types import (
    AnnotationDef,
    AnnotationFieldType,
    ArrayFieldType,
    ClassTokenFieldType,
    EnumFieldType,
    FieldType,
    PrimitiveFieldType,
    PrimitiveType,
    StringFieldType,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def lookup_or_create(
    native_type: type,
    pool: DefinitionPool,
    introspector: TypeIntrospector | None = None,
) -> AnnotationDef:
    """Return the definition of a native annotation type.

    If *pool* already holds a definition for *native_type* it is returned
    unchanged. Otherwise one is synthesized from the type's declared fields
    and inserted into *pool*. Definitions of nested annotation types are
    resolved through the same pool.

    Args:
        native_type: The native annotation type.
        pool: Cache of definitions keyed by native type identity.
        introspector: Reflection capability; defaults to
            :class:`~scenelib.ingest.introspection.ReflectiveIntrospector`.

    Returns:
        The pooled :class:`~scenelib.model.types.AnnotationDef`.

    Raises:
        IngestionError: If *native_type* is not an annotation type or declares
            a field whose type has no canonical descriptor.
        DefinitionError: If the type is recursive or a default value cannot be
            represented.
    """
    introspector = introspector or ReflectiveIntrospector()
    if not introspector.is_annotation_type(native_type):
        raise IngestionError(f"{native_type!r} is not an annotation type")
    return pool.get_or_create(native_type, lambda t: _build_definition(t, pool, introspector))


def from_native(
    instance: object,
    pool: DefinitionPool,
    introspector: TypeIntrospector | None = None,
) -> SceneAnnotation:
    """Convert a native annotation instance into a :class:`SceneAnnotation`.

    For every field of the instance's definition the raw value is read and,
    if it does not already fit the field's descriptor, coerced:

    1. Nested native annotations are ingested recursively.
    2. Scalars are reduced to plain builtins: enum constants to their name
       (their value in primitive fields), ``str``/``int`` subclasses to
       ``str``/``int``, and ``int`` to ``float`` in float fields.
    3. Sequences become tuples of their elements' string renderings (type
       tokens render as type names).
    4. Anything else becomes its string rendering.

    Args:
        instance: The native annotation instance.
        pool: Cache of definitions keyed by native type identity.
        introspector: Reflection capability; defaults to
            :class:`~scenelib.ingest.introspection.ReflectiveIntrospector`.

    Returns:
        The ingested annotation.

    Raises:
        IngestionError: If a field cannot be read or its value cannot be
            coerced into the canonical value algebra.
    """
    introspector = introspector or ReflectiveIntrospector()
    definition = lookup_or_create(type(instance), pool, introspector)
    logger.debug("Ingesting %s", definition.name)

    values: dict[str, Any] = {}
    for field_name, field_type in definition.field_types.items():
        if not introspector.has_field(instance, field_name):
            raise IngestionError(
                f"No field '{field_name}' on {definition.name}; schema and reflection disagree (from {instance!r})"
            )
        try:
            raw = introspector.get_field_value(instance, field_name)
        except Exception as exc:
            raise IngestionError(f"Cannot read field '{field_name}' of {definition.name}: {exc}") from exc

        value = _coerce(raw, field_type, pool, introspector)
        if not field_type.is_valid_value(value):
            raise IngestionError(
                f"Invalid value {value!r} of type {type(raw).__name__} for field '{field_name}' "
                f"of {definition.name}; expected {field_type}"
            )
        values[field_name] = value

    return SceneAnnotation(definition, values)


# ################
# Implementation
# ################

_SEQUENCE_ORIGINS = (list, tuple, Sequence)


def _build_definition(native_type: type, pool: DefinitionPool, introspector: TypeIntrospector) -> AnnotationDef:
    """Synthesize the definition of *native_type* from its declared fields."""
    name = introspector.type_name(native_type)
    field_types: dict[str, FieldType] = {}
    defaults: dict[str, Any] = {}

    for native_field in introspector.declared_fields(native_type):
        field_type = _descriptor_for(native_field.declared_type, pool, introspector, f"{name}.{native_field.name}")
        field_types[native_field.name] = field_type
        if native_field.has_default:
            default = _coerce(native_field.default, field_type, pool, introspector)
            if not field_type.is_valid_value(default):
                raise DefinitionError(
                    f"Default {native_field.default!r} of {name}.{native_field.name} is not a valid {field_type}"
                )
            defaults[native_field.name] = default

    try:
        return AnnotationDef(name=name, field_types=field_types, defaults=defaults)
    except ValidationError as exc:
        raise DefinitionError(f"Cannot define annotation type {name}: {exc}") from exc


def _descriptor_for(hint: Any, pool: DefinitionPool, introspector: TypeIntrospector, location: str) -> FieldType:
    """Map a declared type hint to its field type descriptor."""
    if isinstance(hint, type) and typing.get_origin(hint) is None:
        if issubclass(hint, Enum):
            return EnumFieldType(type_name=introspector.type_name(hint), constants=tuple(m.name for m in hint))
        if hint is bool:
            return PrimitiveFieldType(primitive=PrimitiveType.BOOL)
        if hint is int:
            return PrimitiveFieldType(primitive=PrimitiveType.INT)
        if hint is float:
            return PrimitiveFieldType(primitive=PrimitiveType.FLOAT)
        if hint is str:
            return StringFieldType()
        if hint is type:
            return ClassTokenFieldType()
        if hint in (list, tuple):
            return ArrayFieldType()
        if introspector.is_annotation_type(hint):
            return AnnotationFieldType(definition=lookup_or_create(hint, pool, introspector))

    origin = typing.get_origin(hint)
    if origin is type:
        return ClassTokenFieldType()
    if origin in _SEQUENCE_ORIGINS:
        args = typing.get_args(hint)
        if not args:
            return ArrayFieldType()
        if origin is tuple and (len(args) != 2 or args[1] is not Ellipsis):
            raise IngestionError(f"Unsupported type {hint!r} for {location}: only tuple[X, ...] is an array")
        element_type = _descriptor_for(args[0], pool, introspector, location)
        if isinstance(element_type, ArrayFieldType):
            raise IngestionError(f"Unsupported type {hint!r} for {location}: arrays cannot be nested")
        return ArrayFieldType(element_type=element_type)

    raise IngestionError(f"Unsupported type {hint!r} for {location}")


def _coerce(value: Any, field_type: FieldType, pool: DefinitionPool, introspector: TypeIntrospector) -> Any:
    """Bring a raw native value into canonical form for *field_type*.

    The result is not guaranteed to be valid; callers check it.
    """
    value = _ingest_nested(value, field_type, pool, introspector)
    value = _plain_scalars(value, field_type)
    if field_type.is_valid_value(value):
        return value
    if _is_sequence(value):
        return tuple(render_native(element) for element in value)
    return render_native(value)


def _ingest_nested(value: Any, field_type: FieldType, pool: DefinitionPool, introspector: TypeIntrospector) -> Any:
    """Recursively ingest native annotations held by annotation-typed fields."""
    if isinstance(field_type, ArrayFieldType):
        if isinstance(field_type.element_type, AnnotationFieldType) and _is_sequence(value):
            return tuple(_ingest_one(element, pool, introspector) for element in value)
        return value
    if isinstance(field_type, AnnotationFieldType):
        return _ingest_one(value, pool, introspector)
    return value


def _plain_scalars(value: Any, field_type: FieldType) -> Any:
    """Reduce scalar values, or the elements of a scalar array, to plain builtins."""
    if isinstance(field_type, AnnotationFieldType):
        return value
    if isinstance(field_type, ArrayFieldType):
        if isinstance(field_type.element_type, AnnotationFieldType) or not _is_sequence(value):
            return value
        return tuple(_plain_scalar(element, field_type.element_type) for element in value)
    return _plain_scalar(value, field_type)


def _plain_scalar(value: Any, field_type: FieldType | None) -> Any:
    if isinstance(value, Enum):
        if not isinstance(field_type, PrimitiveFieldType):
            return value.name
        value = value.value
    if isinstance(field_type, PrimitiveFieldType):
        # bool is an int subclass but never an int or float value.
        if isinstance(value, bool):
            return value
        if field_type.primitive is PrimitiveType.INT and isinstance(value, int):
            return int(value)
        if field_type.primitive is PrimitiveType.FLOAT and isinstance(value, (int, float)):
            try:
                return float(value)
            except OverflowError:
                return value
        return value
    if isinstance(value, str) and type(value) is not str:
        return str.__str__(value)
    return value


def _ingest_one(value: Any, pool: DefinitionPool, introspector: TypeIntrospector) -> Any:
    if introspector.is_annotation_type(type(value)):
        return from_native(value, pool, introspector)
    return value


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
