"""
Box builder handed to definition blocks.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from boxer.core.errors import DuplicateViewError, ReservedHelperNameError
from boxer.core.scope import HelperScope
from boxer.core.types import Box, Helper, Precondition, ViewBody, ViewDefinition


@dataclass
class _ViewDraft:
    name: str
    body: ViewBody
    extends: tuple[str, ...]
    preconditions: list[Precondition] = field(default_factory=list)
    helpers: dict[str, Helper] = field(default_factory=dict)

    def freeze(self) -> ViewDefinition:
        return ViewDefinition(
            name=self.name,
            body=self.body,
            extends=self.extends,
            preconditions=tuple(self.preconditions),
            helpers=MappingProxyType(dict(self.helpers)),
        )


class BoxBuilder:
    """
    Collects the views of one box inside a definition block.

    `precondition` and `helper` attach to the most recently declared view.
    Declared before any view, they apply to the whole box.

    Example:
        def define_user(box):
            box.helper("avatar_url", lambda user: f"/avatars/{user.id}.png")

            @box.view("base")
            def base(h, user):
                return {"id": user.id, "name": user.name}

            @box.view("private", extends="base")
            def private(h, user, viewer):
                return {"email": user.email, "avatar": h.avatar_url(user)}

            @box.precondition
            def is_self(user, viewer):
                return user.id == viewer.id
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._views: dict[str, _ViewDraft] = {}
        self._current: _ViewDraft | None = None
        self._preconditions: list[Precondition] = []
        self._helpers: dict[str, Helper] = {}

    def view(
        self,
        name: str,
        body: ViewBody | None = None,
        *,
        extends: str | Sequence[str] | None = None,
    ) -> Any:
        """
        Declare a view.

        Without `body`, returns a decorator that registers the decorated
        function and hands it back unchanged.

        Args:
            name: View name, unique within the box
            body: Callable `body(scope, obj, *args, **kwargs) -> mapping`
            extends: Parent view name, or parent names in precedence order
                (later parents override earlier ones)
        """
        parents = _normalize_extends(extends)

        if body is None:
            def decorator(fn: ViewBody) -> ViewBody:
                self._add_view(name, fn, parents)
                return fn

            return decorator

        self._add_view(name, body, parents)
        return body

    def _add_view(self, name: str, body: ViewBody, parents: tuple[str, ...]) -> None:
        if name in self._views:
            raise DuplicateViewError(self.name, name)
        if not callable(body):
            raise TypeError(f"View body for '{name}' must be callable")
        draft = _ViewDraft(name=name, body=body, extends=parents)
        self._views[name] = draft
        self._current = draft

    def precondition(self, predicate: Precondition | None = None) -> Any:
        """
        Attach a guard `predicate(obj, *args, **kwargs)` to the current view.

        Usable as `box.precondition(fn)` or as a bare decorator.
        """
        if predicate is None:
            return self.precondition
        if not callable(predicate):
            raise TypeError("Precondition must be callable")

        if self._current is None:
            self._preconditions.append(predicate)
        else:
            self._current.preconditions.append(predicate)
        return predicate

    def helper(
        self,
        name: str | Callable[..., Any] | None = None,
        function: Helper | None = None,
    ) -> Any:
        """
        Attach a named helper to the current view.

        Forms:
            box.helper("slug", make_slug)
            @box.helper            # uses the function name
            @box.helper("slug")
        """
        if callable(name) and function is None:
            function, name = name, name.__name__

        if function is None:
            def decorator(fn: Helper) -> Helper:
                self.helper(name or fn.__name__, fn)
                return fn

            return decorator

        if not callable(function):
            raise TypeError(f"Helper '{name}' must be callable")
        if name in HelperScope.RESERVED_NAMES:
            raise ReservedHelperNameError(name, sorted(HelperScope.RESERVED_NAMES))

        if self._current is None:
            self._helpers[name] = function
        else:
            self._current.helpers[name] = function
        return function

    def build(self) -> Box:
        """Freeze the collected declarations into a Box."""
        return Box(
            name=self.name,
            views=MappingProxyType(
                {name: draft.freeze() for name, draft in self._views.items()}
            ),
            preconditions=tuple(self._preconditions),
            helpers=MappingProxyType(dict(self._helpers)),
        )


def _normalize_extends(extends: str | Sequence[str] | None) -> tuple[str, ...]:
    if extends is None:
        return ()
    if isinstance(extends, str):
        return (extends,)
    parents = tuple(extends)
    for parent in parents:
        if not isinstance(parent, str):
            raise TypeError(f"extends entries must be view names, got {parent!r}")
    return parents
