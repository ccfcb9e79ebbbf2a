# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for scenelib documentation."""

project = "scenelib"
author = "Scenelib Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc", "sphinx.ext.napoleon"]

html_theme = "alabaster"
