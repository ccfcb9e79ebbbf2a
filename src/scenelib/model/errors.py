# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors raised while building definitions, annotations, and during ingestion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class RepresentationViolation:
    """A single broken representation invariant of an annotation.

    Attributes:
        field_name: The offending field.
        value: The offending value, or ``None`` when the field is missing.
        expected: Rendered descriptor the value should satisfy, or ``None``
            when the field is not declared at all.
        message: Human-readable description of the violation.
    """

    field_name: str
    value: Any
    expected: str | None
    message: str


class AnnotationError(Exception):
    """Base class for all errors raised by scenelib."""


class InvalidAnnotationError(AnnotationError):
    """Raised when field values do not match their annotation definition.

    This signals a programming error in whoever built the values, not bad
    user input.
    """

    def __init__(self, definition_name: str, violations: list[RepresentationViolation]) -> None:
        self.definition_name = definition_name
        self.violations = violations
        details = "\n".join(f"  {v.message}" for v in violations)
        super().__init__(f"Invalid annotation @{definition_name}:\n{details}")


class DefinitionError(AnnotationError):
    """Raised when an annotation definition cannot be built for a native type."""


class IngestionError(AnnotationError):
    """Raised when a native annotation instance cannot be converted.

    Covers reflection failures (missing or failing accessors) and values that
    cannot be coerced into the canonical value algebra.
    """
