# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for scenelib."""

from scenelib.workspace.config import (
    CONFIG_FILE_NAME,
    DEFAULT_OUTPUT_DIRECTORY,
    ConfigError,
    InferenceOptions,
    load_inference_options,
    save_inference_options,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_OUTPUT_DIRECTORY",
    "ConfigError",
    "InferenceOptions",
    "load_inference_options",
    "save_inference_options",
]
