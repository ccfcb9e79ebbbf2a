# Copyright 2026 Scenelib Contributors
# SPDX-License-Identifier: Apache-2.0

"""Cache of annotation definitions keyed by native type identity.

A pool is passed explicitly into every ingestion call. Sharing one pool
between ingestions guarantees that every annotation of a given native type
references the very same :class:`~scenelib.model.types.AnnotationDef`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from scenelib.model.errors import DefinitionError
from scenelib.model.types import AnnotationDef

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class DefinitionPool:
    """Thread-safe mapping from native annotation types to their definitions."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._definitions: dict[type, AnnotationDef] = {}
        # Native types whose factory is running; only the lock holder touches this.
        self._pending: set[type] = set()

    def get(self, native_type: type) -> AnnotationDef | None:
        """Return the pooled definition for *native_type*, or ``None``."""
        with self._lock:
            return self._definitions.get(native_type)

    def get_or_create(
        self,
        native_type: type,
        factory: Callable[[type], AnnotationDef],
    ) -> AnnotationDef:
        """Return the pooled definition for *native_type*, creating it if absent.

        The check and the insert happen under one lock, so *factory* runs at
        most once per native type and all callers observe the same instance.
        The lock is re-entrant: *factory* may itself look up the definitions
        of nested annotation types in this pool.

        Args:
            native_type: The native annotation type, compared by identity.
            factory: Builds the definition for *native_type*.

        Returns:
            The single definition pooled for *native_type*.

        Raises:
            DefinitionError: If *native_type* is requested again while its own
                definition is being built (a recursive annotation type).
        """
        with self._lock:
            existing = self._definitions.get(native_type)
            if existing is not None:
                return existing
            if native_type in self._pending:
                raise DefinitionError(f"Annotation type {native_type!r} refers to itself")
            self._pending.add(native_type)
            try:
                definition = factory(native_type)
            finally:
                self._pending.discard(native_type)
            self._definitions[native_type] = definition
            logger.debug("Created annotation definition %s", definition.name)
            return definition

    def definitions(self) -> list[AnnotationDef]:
        """Return all pooled definitions in creation order."""
        with self._lock:
            return list(self._definitions.values())

    def __contains__(self, native_type: object) -> bool:
        with self._lock:
            return native_type in self._definitions

    def __len__(self) -> int:
        with self._lock:
            return len(self._definitions)
