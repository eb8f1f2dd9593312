"""
Shared type definitions for Boxer.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# body(scope, obj, *args, **kwargs) -> mapping of output key to value
ViewBody = Callable[..., Mapping[str, Any]]

# predicate(obj, *args, **kwargs) -> truthy when the view may run
Precondition = Callable[..., Any]

Helper = Callable[..., Any]

def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ViewDefinition:
    """
    A named, inheritable view inside a box.

    `extends` lists parent views of the same box in declaration order.
    Preconditions and helpers are those declared directly on this view.
    """

    name: str
    body: ViewBody
    extends: tuple[str, ...] = ()
    preconditions: tuple[Precondition, ...] = ()
    helpers: Mapping[str, Helper] = field(default_factory=_empty_mapping)


@dataclass(frozen=True)
class Box:
    """
    A named collection of views for one logical object type.

    Box-wide preconditions and helpers were declared before the first view
    and apply to every view of the box.
    """

    name: str
    views: Mapping[str, ViewDefinition] = field(default_factory=_empty_mapping)
    preconditions: tuple[Precondition, ...] = ()
    helpers: Mapping[str, Helper] = field(default_factory=_empty_mapping)

    def get_view(self, name: str) -> ViewDefinition | None:
        """Get a view definition by name."""
        return self.views.get(name)

    def list_views(self) -> list[str]:
        """List view names in declaration order."""
        return list(self.views.keys())

    def __len__(self) -> int:
        return len(self.views)

    def __contains__(self, name: str) -> bool:
        return name in self.views


@dataclass(frozen=True)
class ResolvedStep:
    """One view of a resolved chain with the helpers visible to its body."""

    definition: ViewDefinition
    helpers: Mapping[str, Helper]

    @property
    def name(self) -> str:
        return self.definition.name


@dataclass(frozen=True)
class ResolvedView:
    """
    Linearized chain for a requested view, root ancestor first.

    The last step is always the requested view itself.
    """

    box: Box
    view: str
    steps: tuple[ResolvedStep, ...]

    @property
    def chain(self) -> tuple[ViewDefinition, ...]:
        """View definitions in execution order."""
        return tuple(step.definition for step in self.steps)

    @property
    def names(self) -> list[str]:
        """View names in execution order."""
        return [step.name for step in self.steps]

    @property
    def helpers(self) -> Mapping[str, Helper]:
        """Helpers visible to the requested view."""
        return self.steps[-1].helpers
