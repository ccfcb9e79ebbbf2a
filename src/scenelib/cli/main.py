# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the scenelib command-line interface."""

import argparse
import importlib
import logging
import sys
from pathlib import Path

from scenelib.ingest.ingestor import from_native, lookup_or_create
from scenelib.model.errors import AnnotationError
from scenelib.model.pool import DefinitionPool
from scenelib.workspace.config import (
    CONFIG_FILE_NAME,
    ConfigError,
    InferenceOptions,
    load_inference_options,
    save_inference_options,
)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the scenelib CLI."""
    parser = argparse.ArgumentParser(
        prog="scenelib",
        description="scenelib: canonical annotation values",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write default inference options",
        description=f"Create a {CONFIG_FILE_NAME} file with default inference options.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the options file to (default: current directory)",
    )

    # options subcommand
    options_parser = subparsers.add_parser(
        "options",
        help="Show the effective inference options",
        description=f"Load and validate {CONFIG_FILE_NAME}, then print the effective options.",
    )
    options_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the options file (default: current directory)",
    )

    # describe subcommand
    describe_parser = subparsers.add_parser(
        "describe",
        help="Show the definition of a native annotation type",
        description="Build and print the annotation definition of a dataclass or pydantic model.",
    )
    describe_parser.add_argument(
        "target",
        help="Annotation type as MODULE:NAME",
    )

    # render subcommand
    render_parser = subparsers.add_parser(
        "render",
        help="Ingest native annotations and print them",
        description=(
            "Ingest annotation instances (an instance or an iterable of instances per target) "
            "and print their canonical renderings in sorted order."
        ),
    )
    render_parser.add_argument(
        "targets",
        nargs="+",
        metavar="target",
        help="Annotation instance(s) as MODULE:NAME",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "options":
        return _cmd_options(args)
    if args.command == "describe":
        return _cmd_describe(args)
    if args.command == "render":
        return _cmd_render(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        print(f"Error: options file already exists at '{config_file}'.", file=sys.stderr)
        return 1

    try:
        save_inference_options(InferenceOptions(), config_file)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote default inference options to '{config_file}'.")
    return 0


def _cmd_options(args: argparse.Namespace) -> int:
    """Handle the options subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        try:
            options = load_inference_options(config_file)
        except ConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
    else:
        print(f"No {CONFIG_FILE_NAME} found; using defaults.")
        options = InferenceOptions()

    print(f"Annotation kinds: {', '.join(options.annotation_kinds)}")
    print(f"Output directory: {options.resolve_output_directory(directory)}")
    return 0


def _cmd_describe(args: argparse.Namespace) -> int:
    """Handle the describe subcommand."""
    try:
        native_type = _resolve_target(args.target)
        definition = lookup_or_create(native_type, DefinitionPool())
    except (ImportError, AttributeError, ValueError) as exc:
        print(f"Error: cannot resolve '{args.target}': {exc}", file=sys.stderr)
        return 1
    except AnnotationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(definition)
    return 0


def _cmd_render(args: argparse.Namespace) -> int:
    """Handle the render subcommand."""
    pool = DefinitionPool()
    rendered: list[str] = []
    for target in args.targets:
        try:
            resolved = _resolve_target(target)
        except (ImportError, AttributeError, ValueError) as exc:
            print(f"Error: cannot resolve '{target}': {exc}", file=sys.stderr)
            return 1

        instances = list(resolved) if isinstance(resolved, (list, tuple, set, frozenset)) else [resolved]
        for instance in instances:
            try:
                annotation = from_native(instance, pool)
            except AnnotationError as exc:
                print(f"Error: {target}: {exc}", file=sys.stderr)
                return 1
            rendered.append(str(annotation))

    for line in sorted(rendered):
        print(line)
    return 0


def _resolve_target(target: str) -> object:
    """Import ``MODULE:NAME`` and return the named object; NAME may be dotted."""
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError("expected MODULE:NAME")
    obj: object = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj
