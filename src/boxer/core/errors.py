"""
Error taxonomy for Boxer.

All Boxer errors inherit from BoxerError and include:
- A unique error code for programmatic handling
- A human-readable message
- Optional hints describing how to fix the box configuration or call
"""

from typing import Any


class BoxerError(Exception):
    """
    Base class for all Boxer errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        retry_hints: Suggestions for how to fix the error
        details: Additional error context
    """

    code: str = "BOXER_ERROR"

    def __init__(
        self,
        message: str,
        *,
        retry_hints: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.retry_hints = retry_hints or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "retry_hints": self.retry_hints,
            "details": self.details,
        }


class DuplicateBoxError(BoxerError):
    """A box with the same name is already registered."""

    code = "DUPLICATE_BOX"

    def __init__(self, box: str, **kwargs: Any) -> None:
        super().__init__(
            f"Box '{box}' is already defined",
            retry_hints=["Each box name may only be defined once per registry"],
            details={"box": box},
            **kwargs,
        )
        self.box = box


class DuplicateViewError(BoxerError):
    """A view with the same name was declared twice in one box."""

    code = "DUPLICATE_VIEW"

    def __init__(self, box: str, view: str, **kwargs: Any) -> None:
        super().__init__(
            f"View '{view}' is already defined on box '{box}'",
            details={"box": box, "view": view},
            **kwargs,
        )
        self.box = box
        self.view = view


class UnknownBoxError(BoxerError):
    """The requested box is not registered."""

    code = "UNKNOWN_BOX"

    def __init__(
        self,
        box: str,
        known_boxes: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        hints = []
        if known_boxes:
            hints.append(f"Known boxes: {', '.join(known_boxes)}")
        super().__init__(
            f"Box '{box}' is not defined",
            retry_hints=hints,
            details={"box": box, "known_boxes": known_boxes},
            **kwargs,
        )
        self.box = box


class UnknownViewError(BoxerError):
    """The requested view is not defined on the box."""

    code = "UNKNOWN_VIEW"

    def __init__(
        self,
        box: str,
        view: str,
        known_views: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        hints = []
        if known_views:
            hints.append(f"Views on {box}: {', '.join(known_views)}")
        super().__init__(
            f"View '{view}' is not defined on box '{box}'",
            retry_hints=hints,
            details={"box": box, "view": view, "known_views": known_views},
            **kwargs,
        )
        self.box = box
        self.view = view


class UnknownParentViewError(BoxerError):
    """A view extends a view that does not exist in the same box."""

    code = "UNKNOWN_PARENT_VIEW"

    def __init__(self, box: str, view: str, parent: str, **kwargs: Any) -> None:
        super().__init__(
            f"View '{view}' on box '{box}' extends unknown view '{parent}'",
            retry_hints=[f"Define view '{parent}' on box '{box}' or fix the extends list"],
            details={"box": box, "view": view, "parent": parent},
            **kwargs,
        )
        self.box = box
        self.view = view
        self.parent = parent


class CyclicInheritanceError(BoxerError):
    """The extends graph of a view contains a cycle."""

    code = "CYCLIC_INHERITANCE"

    def __init__(self, box: str, view: str, path: list[str], **kwargs: Any) -> None:
        super().__init__(
            f"Cyclic inheritance on box '{box}' while resolving '{view}': "
            + " -> ".join(path),
            retry_hints=["A view may not extend itself, directly or transitively"],
            details={"box": box, "view": view, "path": path},
            **kwargs,
        )
        self.box = box
        self.view = view
        self.path = path


class PreconditionFailedError(BoxerError):
    """
    A precondition returned a falsy value while shipping a view.

    The view that owns the failing predicate is reported, which may be an
    ancestor of the requested view.
    """

    code = "PRECONDITION_FAILED"

    def __init__(
        self,
        box: str,
        view: str,
        precondition: Any,
        **kwargs: Any,
    ) -> None:
        name = getattr(precondition, "__name__", repr(precondition))
        super().__init__(
            f"Precondition '{name}' failed for view '{view}' on box '{box}'",
            details={"box": box, "view": view, "precondition": name},
            **kwargs,
        )
        self.box = box
        self.view = view
        self.precondition = precondition


class UnknownHelperError(BoxerError, AttributeError):
    """A view body called a helper that is not visible from its chain."""

    code = "UNKNOWN_HELPER"

    def __init__(
        self,
        helper: str,
        view: str,
        available: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        hints = []
        if available:
            hints.append(f"Helpers visible from '{view}': {', '.join(available)}")
        else:
            hints.append(f"No helpers are visible from '{view}'")
        super().__init__(
            f"Helper '{helper}' is not available to view '{view}'",
            retry_hints=hints,
            details={"helper": helper, "view": view, "available": available},
            **kwargs,
        )
        self.helper = helper
        self.view = view


class ViewBodyError(BoxerError):
    """A view body returned something other than a mapping."""

    code = "VIEW_BODY_ERROR"

    def __init__(self, box: str, view: str, result: Any, **kwargs: Any) -> None:
        super().__init__(
            f"View '{view}' on box '{box}' returned {type(result).__name__}, "
            "expected a mapping",
            details={"box": box, "view": view, "result_type": type(result).__name__},
            **kwargs,
        )
        self.box = box
        self.view = view


class RegistryFrozenError(BoxerError):
    """The registry was frozen and no longer accepts definitions."""

    code = "REGISTRY_FROZEN"

    def __init__(self, box: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot define box '{box}': the registry is frozen",
            retry_hints=["Define all boxes during startup, before calling freeze()"],
            details={"box": box},
            **kwargs,
        )
        self.box = box


class ReservedHelperNameError(BoxerError, ValueError):
    """A helper name collides with a member of the helper scope."""

    code = "RESERVED_HELPER_NAME"

    def __init__(self, helper: str, reserved: list[str], **kwargs: Any) -> None:
        super().__init__(
            f"Helper name '{helper}' is reserved",
            retry_hints=[f"Reserved helper names: {', '.join(reserved)}"],
            details={"helper": helper, "reserved": reserved},
            **kwargs,
        )
        self.helper = helper
