# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Annotation value model: descriptors, definitions, and annotation values."""

from scenelib.model.annotation import SceneAnnotation, validate
from scenelib.model.errors import (
    AnnotationError,
    DefinitionError,
    IngestionError,
    InvalidAnnotationError,
    RepresentationViolation,
)
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
    ScalarFieldType,
    StringFieldType,
)

__all__ = [
    # Field types
    "PrimitiveType",
    "PrimitiveFieldType",
    "StringFieldType",
    "ClassTokenFieldType",
    "EnumFieldType",
    "AnnotationFieldType",
    "ArrayFieldType",
    "ScalarFieldType",
    "FieldType",
    # Definitions
    "AnnotationDef",
    "DefinitionPool",
    # Annotations
    "SceneAnnotation",
    "validate",
    # Errors
    "AnnotationError",
    "DefinitionError",
    "IngestionError",
    "InvalidAnnotationError",
    "RepresentationViolation",
]
