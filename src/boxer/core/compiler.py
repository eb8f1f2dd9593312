"""
View compiler: inheritance resolution and chain execution.

Resolution turns a (box, view) pair into a ResolvedView whose steps run
root ancestor first. Multiple inheritance is linearized with a depth-first,
left-to-right post-order walk over `extends`, keeping the first occurrence
of every ancestor. The requested view always comes last, so it overrides
all of its ancestors, and for two parents the one listed later overrides
the one listed earlier.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from boxer.core.errors import (
    CyclicInheritanceError,
    PreconditionFailedError,
    UnknownParentViewError,
    UnknownViewError,
    ViewBodyError,
)
from boxer.core.scope import HelperScope
from boxer.core.types import (
    Box,
    Helper,
    ResolvedStep,
    ResolvedView,
    ViewDefinition,
)
from boxer.logging import get_logger

logger = get_logger(__name__)


class ViewCompiler:
    """
    Resolves and executes view chains.

    The compiler holds no per-box state, so one instance can serve any
    number of registries and threads.
    """

    def __init__(self, strict_results: bool = True) -> None:
        """
        Initialize the compiler.

        Args:
            strict_results: Reject bodies that return None instead of a mapping
        """
        self.strict_results = strict_results

    # === Resolution ===

    def linearize(self, box: Box, view: str) -> tuple[ViewDefinition, ...]:
        """
        Linearize the ancestors of a view, root first and the view itself last.

        Raises:
            UnknownViewError: If `view` is not defined on the box
            UnknownParentViewError: If an extends entry names a missing view
            CyclicInheritanceError: If the extends graph loops back on itself
        """
        root = box.get_view(view)
        if root is None:
            raise UnknownViewError(box.name, view, known_views=box.list_views())

        # No acyclic path can be longer than the number of views in the box
        limit = len(box)

        order: list[ViewDefinition] = []
        done: set[str] = set()
        path: list[str] = [root.name]
        stack: list[tuple[ViewDefinition, Iterator[str]]] = [(root, iter(root.extends))]

        while stack:
            definition, parents = stack[-1]
            for parent in parents:
                if parent in done:
                    continue
                if parent in path:
                    raise CyclicInheritanceError(box.name, view, path + [parent])
                parent_definition = box.get_view(parent)
                if parent_definition is None:
                    raise UnknownParentViewError(box.name, definition.name, parent)
                if len(stack) >= limit:
                    raise CyclicInheritanceError(box.name, view, path + [parent])
                stack.append((parent_definition, iter(parent_definition.extends)))
                path.append(parent)
                break
            else:
                stack.pop()
                path.pop()
                done.add(definition.name)
                order.append(definition)

        return tuple(order)

    def resolve(self, box: Box, view: str) -> ResolvedView:
        """
        Resolve a view into its executable chain.

        Each step carries the helpers visible to that step's body: box-wide
        helpers, then the helpers of the step's own ancestors in
        linearization order, then its own. Later declarations win.
        """
        chain = self.linearize(box, view)
        steps = []
        for definition in chain:
            if definition.name == view:
                ancestry = chain
            else:
                ancestry = self.linearize(box, definition.name)
            steps.append(ResolvedStep(definition, self._collect_helpers(box, ancestry)))

        logger.debug(
            "Resolved view",
            box=box.name,
            view=view,
            chain=[definition.name for definition in chain],
        )
        return ResolvedView(box=box, view=view, steps=tuple(steps))

    def _collect_helpers(
        self, box: Box, ancestry: tuple[ViewDefinition, ...]
    ) -> Mapping[str, Helper]:
        helpers: dict[str, Helper] = dict(box.helpers)
        for definition in ancestry:
            helpers.update(definition.helpers)
        return MappingProxyType(helpers)

    # === Execution ===

    def execute(
        self,
        resolved: ResolvedView,
        obj: Any,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Run a resolved chain against an object.

        For every step, root first: evaluate its preconditions, call its body
        and merge the returned mapping over the result so far. Box-wide
        preconditions are evaluated once, before the first step, and are
        reported against that step's view. Nothing is returned unless every
        step succeeds.
        """
        kwargs = kwargs or {}
        box = resolved.box
        result: dict[str, Any] = {}

        for index, step in enumerate(resolved.steps):
            definition = step.definition
            if index == 0:
                self._check(box, definition.name, box.preconditions, obj, args, kwargs)
            self._check(box, definition.name, definition.preconditions, obj, args, kwargs)

            scope = HelperScope(box.name, definition.name, step.helpers)
            output = definition.body(scope, obj, *args, **kwargs)
            if output is None and not self.strict_results:
                continue
            if not isinstance(output, Mapping):
                raise ViewBodyError(box.name, definition.name, output)
            result.update(output)

        return result

    def _check(
        self,
        box: Box,
        view: str,
        preconditions: tuple[Any, ...],
        obj: Any,
        args: tuple[Any, ...],
        kwargs: Mapping[str, Any],
    ) -> None:
        for predicate in preconditions:
            if not predicate(obj, *args, **kwargs):
                raise PreconditionFailedError(box.name, view, predicate)

    def ship(
        self,
        box: Box,
        view: str,
        obj: Any,
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Resolve and execute in one call."""
        return self.execute(self.resolve(box, view), obj, args, kwargs)
