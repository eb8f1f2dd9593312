"""
Process-wide box registry and the `ship` entry point.

The registry has two phases. During initialization boxes are added with
`define`; each call publishes a new immutable snapshot under a lock, so
`ship` never needs one. `freeze` validates every view, caches the resolved
chains and rejects any further definitions.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from boxer.builder import BoxBuilder
from boxer.config import BoxerConfig
from boxer.core.compiler import ViewCompiler
from boxer.core.errors import (
    BoxerError,
    DuplicateBoxError,
    RegistryFrozenError,
    UnknownBoxError,
)
from boxer.core.types import Box, ResolvedView
from boxer.logging import get_logger, with_log_context

logger = get_logger(__name__)

DefinitionBlock = Callable[[BoxBuilder], Any]


@dataclass(frozen=True)
class _Snapshot:
    boxes: Mapping[str, Box] = field(default_factory=lambda: MappingProxyType({}))
    resolved: Mapping[tuple[str, str], ResolvedView] = field(
        default_factory=lambda: MappingProxyType({})
    )
    frozen: bool = False


class BoxRegistry:
    """
    Registry of boxes.

    Example:
        registry = BoxRegistry()

        @registry.box("user")
        def user_box(box):
            @box.view("base")
            def base(h, user):
                return {"id": user.id, "name": user.name}

        registry.freeze()
        registry.ship("user", user)  # {"id": ..., "name": ...}
    """

    def __init__(
        self,
        config: BoxerConfig | None = None,
        compiler: ViewCompiler | None = None,
    ) -> None:
        self.config = config or BoxerConfig()
        self.compiler = compiler or ViewCompiler(strict_results=self.config.strict_results)
        self._lock = threading.Lock()
        self._snapshot = _Snapshot()

    # === Registration ===

    def define(self, name: str, block: DefinitionBlock) -> Box:
        """
        Register a box.

        `block` is called with a BoxBuilder and declares the box's views,
        preconditions and helpers.

        Raises:
            DuplicateBoxError: If the name is already registered
            RegistryFrozenError: If the registry was frozen
        """
        self._check_can_define(self._snapshot, name)

        builder = BoxBuilder(name)
        block(builder)
        box = builder.build()

        with self._lock:
            current = self._snapshot
            self._check_can_define(current, name)
            boxes = dict(current.boxes)
            boxes[name] = box
            self._snapshot = _Snapshot(
                boxes=MappingProxyType(boxes),
                resolved=current.resolved,
                frozen=False,
            )

        logger.debug("Defined box", box=name, views=box.list_views())
        return box

    def box(self, name: str) -> Callable[[DefinitionBlock], DefinitionBlock]:
        """Decorator form of `define`."""

        def decorator(block: DefinitionBlock) -> DefinitionBlock:
            self.define(name, block)
            return block

        return decorator

    def _check_can_define(self, snapshot: _Snapshot, name: str) -> None:
        if snapshot.frozen:
            raise RegistryFrozenError(name)
        if name in snapshot.boxes:
            raise DuplicateBoxError(name)

    def freeze(self) -> None:
        """
        Validate every view and publish the registry as read-only.

        Resolution errors (unknown parents, cycles) surface here instead of
        on the first request. The registry stays unfrozen if any view fails.
        Freezing twice is a no-op.
        """
        with self._lock:
            current = self._snapshot
            if current.frozen:
                return

            resolved = {}
            for box in current.boxes.values():
                for view in box.views:
                    resolved[(box.name, view)] = self.compiler.resolve(box, view)

            self._snapshot = _Snapshot(
                boxes=current.boxes,
                resolved=MappingProxyType(resolved),
                frozen=True,
            )

        logger.info("Registry frozen", boxes=len(current.boxes), views=len(resolved))

    def clear(self) -> None:
        """Drop every box and unfreeze. Meant for tests."""
        with self._lock:
            self._snapshot = _Snapshot()

    # === Introspection ===

    @property
    def frozen(self) -> bool:
        return self._snapshot.frozen

    def box_names(self) -> list[str]:
        """List registered box names in definition order."""
        return list(self._snapshot.boxes.keys())

    def get_box(self, name: str) -> Box:
        """
        Get a registered box.

        Raises:
            UnknownBoxError: If no box has that name
        """
        boxes = self._snapshot.boxes
        box = boxes.get(name)
        if box is None:
            raise UnknownBoxError(name, known_boxes=list(boxes))
        return box

    def view_names(self, box_name: str) -> list[str]:
        """List the views of a box in declaration order."""
        return self.get_box(box_name).list_views()

    def resolve(self, box_name: str, view: str | None = None) -> ResolvedView:
        """Resolve a view chain without executing it."""
        if view is None:
            view = self.config.default_view
        return self._resolve(self._snapshot, box_name, view)

    def _resolve(self, snapshot: _Snapshot, box_name: str, view: str) -> ResolvedView:
        cached = snapshot.resolved.get((box_name, view))
        if cached is not None:
            return cached
        box = snapshot.boxes.get(box_name)
        if box is None:
            raise UnknownBoxError(box_name, known_boxes=list(snapshot.boxes))
        return self.compiler.resolve(box, view)

    def __contains__(self, name: str) -> bool:
        return name in self._snapshot.boxes

    def __len__(self) -> int:
        return len(self._snapshot.boxes)

    # === Shipping ===

    def ship(
        self,
        box_name: str,
        obj: Any,
        *args: Any,
        view: str | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        """
        Ship an object through a box view.

        Resolves the view's inheritance chain and runs it root first. Extra
        positional and keyword arguments are passed to every precondition
        and body unchanged. Either the full merged mapping is returned or an
        error is raised; never a partial result.

        Args:
            box_name: Registered box name
            obj: The object being boxed
            view: View name (defaults to config.default_view)

        Raises:
            UnknownBoxError, UnknownViewError, UnknownParentViewError,
            CyclicInheritanceError, PreconditionFailedError, ViewBodyError
        """
        if view is None:
            view = self.config.default_view
        snapshot = self._snapshot

        with with_log_context(box=box_name, view=view):
            start = time.perf_counter()
            try:
                resolved = self._resolve(snapshot, box_name, view)
                result = self.compiler.execute(resolved, obj, args, kwargs)
            except BoxerError as e:
                if self.config.log_shipments:
                    logger.warning("Ship failed", code=e.code, error=e.message)
                raise

            if self.config.log_shipments:
                logger.debug(
                    "Shipped view",
                    chain=resolved.names,
                    keys=len(result),
                    duration_ms=(time.perf_counter() - start) * 1000,
                )
        return result


# === Default registry ===

_default_registry = BoxRegistry()


def get_registry() -> BoxRegistry:
    """Get the process-wide default registry."""
    return _default_registry


def define(name: str, block: DefinitionBlock) -> Box:
    """Define a box on the default registry."""
    return _default_registry.define(name, block)


def box(name: str) -> Callable[[DefinitionBlock], DefinitionBlock]:
    """Decorator defining a box on the default registry."""
    return _default_registry.box(name)


def ship(
    box_name: str,
    obj: Any,
    *args: Any,
    view: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Ship an object through a view of the default registry."""
    return _default_registry.ship(box_name, obj, *args, view=view, **kwargs)


def freeze() -> None:
    """Freeze the default registry."""
    _default_registry.freeze()


def clear() -> None:
    """Clear the default registry."""
    _default_registry.clear()
