# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Inference options stored in a workspace's ``.scenelib.yaml`` file.

The options select which kinds of annotations the inference layer should
produce and where it writes them. This package only loads and validates
them; it never acts on them.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".scenelib.yaml"

DEFAULT_OUTPUT_DIRECTORY = "annotations"


class ConfigError(Exception):
    """Raised when the options file cannot be read, written, or is invalid."""


class InferenceOptions(BaseModel):
    """User choices for an annotation inference run.

    Attributes:
        infer_nullability: Infer nullability annotations.
        infer_kotlin_signatures: Infer Kotlin signature annotations.
        output_directory: Directory the inferred annotations are written to,
            relative to the workspace root unless absolute.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    infer_nullability: bool = Field(alias="infer-nullability", default=True)
    infer_kotlin_signatures: bool = Field(alias="infer-kotlin-signatures", default=True)
    output_directory: str = Field(alias="output-directory", default=DEFAULT_OUTPUT_DIRECTORY)

    @model_validator(mode="after")
    def check_selection(self) -> InferenceOptions:
        if not self.output_directory.strip():
            raise ValueError("output-directory must not be empty")
        if not self.annotation_kinds:
            raise ValueError("at least one annotation kind must be inferred")
        return self

    @property
    def annotation_kinds(self) -> list[str]:
        """Return the names of the enabled annotation kinds."""
        kinds: list[str] = []
        if self.infer_nullability:
            kinds.append("nullability")
        if self.infer_kotlin_signatures:
            kinds.append("kotlin-signatures")
        return kinds

    def resolve_output_directory(self, root: Path) -> Path:
        """Return the output directory as an absolute path under *root*."""
        return (root / self.output_directory.strip()).resolve()


def load_inference_options(path: Path) -> InferenceOptions:
    """Load and validate inference options from disk.

    An empty file yields the default options.

    Args:
        path: Path to the ``.scenelib.yaml`` file.

    Returns:
        A validated InferenceOptions instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Options file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read options file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in options file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: options file must be a YAML mapping")

    try:
        return InferenceOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid options file '{path}': {exc}") from exc


def save_inference_options(options: InferenceOptions, path: Path) -> None:
    """Write inference options to disk.

    Raises:
        ConfigError: If the file cannot be written.
    """
    data = options.model_dump(by_alias=True)
    try:
        path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot write options file '{path}': {exc}") from exc
