"""
Helper scope handed to view bodies.
"""

from collections.abc import Mapping
from typing import Any

from boxer.core.errors import UnknownHelperError
from boxer.core.types import Helper


class HelperScope:
    """
    Exposes the helpers visible to one view body.

    Helpers are reachable as attributes or through `call`:

        def body(h, user):
            return {"avatar": h.avatar_url(user), "name": h.call("display_name", user)}

    Asking for a helper that was not declared on the view, one of its
    ancestors, or box-wide raises UnknownHelperError.
    """

    __slots__ = ("_box", "_view", "_helpers")

    # Scope members that attribute access would resolve before any helper
    RESERVED_NAMES = frozenset({"box", "view", "helper", "call", "names"})

    def __init__(self, box: str, view: str, helpers: Mapping[str, Helper]) -> None:
        self._box = box
        self._view = view
        self._helpers = helpers

    @property
    def box(self) -> str:
        """Name of the box being shipped."""
        return self._box

    @property
    def view(self) -> str:
        """Name of the view whose body is running."""
        return self._view

    def helper(self, name: str) -> Helper:
        """Get a visible helper by name."""
        try:
            return self._helpers[name]
        except KeyError:
            raise UnknownHelperError(
                name, self._view, available=sorted(self._helpers)
            ) from None

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Invoke a visible helper."""
        return self.helper(name)(*args, **kwargs)

    def names(self) -> list[str]:
        """List visible helper names."""
        return list(self._helpers.keys())

    def __getattr__(self, name: str) -> Helper:
        # private names go through helper()/call()
        if name.startswith("_"):
            raise AttributeError(name)
        return self.helper(name)

    def __contains__(self, name: str) -> bool:
        return name in self._helpers

    def __repr__(self) -> str:
        return f"HelperScope(box={self._box!r}, view={self._view!r}, helpers={self.names()!r})"
