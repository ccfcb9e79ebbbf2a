# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Ingestion of native annotation instances into the scene model."""

from scenelib.ingest.ingestor import from_native, lookup_or_create
from scenelib.ingest.introspection import (
    NativeField,
    ReflectiveIntrospector,
    TypeIntrospector,
    is_class_token,
    render_native,
    type_name,
)

__all__ = [
    "from_native",
    "lookup_or_create",
    "NativeField",
    "ReflectiveIntrospector",
    "TypeIntrospector",
    "is_class_token",
    "render_native",
    "type_name",
]
