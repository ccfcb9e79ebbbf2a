# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reflection over native annotation types.

A native annotation type is any class that declares typed fields. The
ingestor only talks to such types through a :class:`TypeIntrospector`, so
callers can plug in their own notion of "annotation type" (for example a
table of explicit field-extraction functions).

:class:`ReflectiveIntrospector` supports ``@dataclass`` classes and
``pydantic.BaseModel`` subclasses out of the box.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel

from scenelib.model.annotation import SceneAnnotation
from scenelib.model.errors import DefinitionError

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class NativeField:
    """A field declared by a native annotation type.

    Attributes:
        name: Field name, also the name of the accessor on instances.
        declared_type: The declared type hint, e.g. ``int`` or ``tuple[str, ...]``.
        has_default: Whether the field declares a default value.
        default: The native default value when ``has_default`` is set.
    """

    name: str
    declared_type: Any
    has_default: bool = False
    default: Any = None


class TypeIntrospector(Protocol):
    """Capability to enumerate and read the fields of native annotation types."""

    def is_annotation_type(self, native_type: object) -> bool:
        """Return True if *native_type* is a native annotation type."""
        ...

    def type_name(self, native_type: Any) -> str:
        """Return the globally unique name of *native_type*."""
        ...

    def declared_fields(self, native_type: type) -> list[NativeField]:
        """Return the declared fields of *native_type* in declaration order."""
        ...

    def has_field(self, instance: object, field_name: str) -> bool:
        """Return True if *instance* holds *field_name*, without running accessors."""
        ...

    def get_field_value(self, instance: object, field_name: str) -> Any:
        """Return the raw value of *field_name* on *instance*.

        Any exception raised here is an accessor failure; missing fields are
        detected beforehand through :meth:`has_field`.
        """
        ...


class ReflectiveIntrospector:
    """Introspector for dataclasses and pydantic models."""

    def is_annotation_type(self, native_type: object) -> bool:
        if not isinstance(native_type, type) or typing.get_origin(native_type) is not None:
            return False
        if native_type is SceneAnnotation or native_type is BaseModel:
            return False
        return dataclasses.is_dataclass(native_type) or issubclass(native_type, BaseModel)

    def type_name(self, native_type: Any) -> str:
        return type_name(native_type)

    def declared_fields(self, native_type: type) -> list[NativeField]:
        if dataclasses.is_dataclass(native_type):
            return _dataclass_fields(native_type)
        if isinstance(native_type, type) and issubclass(native_type, BaseModel):
            return _model_fields(native_type)
        raise DefinitionError(f"{native_type!r} is neither a dataclass nor a pydantic model")

    def has_field(self, instance: object, field_name: str) -> bool:
        return inspect.getattr_static(instance, field_name, _MISSING) is not _MISSING

    def get_field_value(self, instance: object, field_name: str) -> Any:
        return getattr(instance, field_name)


def is_class_token(value: object) -> bool:
    """Return True if *value* is a type or a parameterized generic such as ``list[int]``."""
    return typing.get_origin(value) is not None or isinstance(value, type)


def type_name(token: Any) -> str:
    """Render a type token as a source-style type name.

    Builtin types render bare (``int``), other types as ``module.QualName``.
    Homogeneous sequence types render with array notation, so ``list[int]``
    and ``tuple[int, ...]`` both become ``int[]``.
    """
    origin = typing.get_origin(token)
    if origin is not None:
        args = [arg for arg in typing.get_args(token) if arg is not Ellipsis]
        if origin in (list, tuple, Sequence) and len(args) == 1:
            return f"{type_name(args[0])}[]"
        return str(token)
    if isinstance(token, type):
        if token.__module__ == "builtins":
            return token.__qualname__
        return f"{token.__module__}.{token.__qualname__}"
    return str(token)


def render_native(value: object) -> str:
    """Render a native value as a string: enum constants by name, types by type name."""
    if isinstance(value, Enum):
        return value.name
    if is_class_token(value):
        return type_name(value)
    return str(value)


# ################
# Implementation
# ################

_MISSING = object()


def _resolve_hints(native_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(native_type)
    except NameError as exc:
        raise DefinitionError(f"Cannot resolve field types of {type_name(native_type)}: {exc}") from exc


def _dataclass_fields(native_type: type) -> list[NativeField]:
    hints = _resolve_hints(native_type)
    result: list[NativeField] = []
    for f in dataclasses.fields(native_type):
        declared_type = hints.get(f.name, f.type)
        if f.default is not dataclasses.MISSING:
            result.append(NativeField(f.name, declared_type, has_default=True, default=f.default))
        elif f.default_factory is not dataclasses.MISSING:
            result.append(NativeField(f.name, declared_type, has_default=True, default=f.default_factory()))
        else:
            result.append(NativeField(f.name, declared_type))
    return result


def _model_fields(native_type: type[BaseModel]) -> list[NativeField]:
    result: list[NativeField] = []
    for name, info in native_type.model_fields.items():
        if info.is_required():
            result.append(NativeField(name, info.annotation))
        else:
            default = info.get_default(call_default_factory=True)
            result.append(NativeField(name, info.annotation, has_default=True, default=default))
    return result
