"""
Testing utilities for Boxer.

Helpers for exercising boxes in application test suites without touching
the process-wide default registry.
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from boxer.config import BoxerConfig
from boxer.registry import BoxRegistry


@contextmanager
def isolated_registry(config: BoxerConfig | None = None) -> Iterator[BoxRegistry]:
    """
    Yield a fresh registry and clear it on exit.

    Usage:
        with isolated_registry() as registry:
            registry.define("user", define_user)
            assert registry.ship("user", user) == {...}
    """
    registry = BoxRegistry(config=config)
    try:
        yield registry
    finally:
        registry.clear()


@dataclass
class CallRecorder:
    """
    Records calls made through wrapped bodies, helpers or predicates.

    Usage:
        recorder = CallRecorder()
        box.view("base", recorder.wrap("base", base_body))
        ...
        assert recorder.count("base") == 1
    """

    calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = field(default_factory=list)

    def wrap(self, label: str, fn: Callable[..., Any]) -> Callable[..., Any]:
        """Wrap `fn` so each call is recorded under `label`."""

        def recorded(*args: Any, **kwargs: Any) -> Any:
            self.calls.append((label, args, kwargs))
            return fn(*args, **kwargs)

        recorded.__name__ = getattr(fn, "__name__", label)
        return recorded

    def count(self, label: str) -> int:
        """Number of recorded calls for a label."""
        return sum(1 for name, _, _ in self.calls if name == label)

    def labels(self) -> list[str]:
        """Labels in call order."""
        return [name for name, _, _ in self.calls]

    def reset(self) -> None:
        self.calls.clear()
