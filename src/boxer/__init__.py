"""
Boxer - composable, inheritable views that turn objects into mappings.

Define a box per object type, declare named views that extend each other,
then ship objects through a view to get an ordered dict ready for any JSON
encoder.
"""

__version__ = "0.1.0"

from boxer.builder import BoxBuilder
from boxer.config import DEFAULT_DEV, DEFAULT_PROD, BoxerConfig
from boxer.core.compiler import ViewCompiler
from boxer.core.errors import (
    BoxerError,
    CyclicInheritanceError,
    DuplicateBoxError,
    DuplicateViewError,
    PreconditionFailedError,
    RegistryFrozenError,
    ReservedHelperNameError,
    UnknownBoxError,
    UnknownHelperError,
    UnknownParentViewError,
    UnknownViewError,
    ViewBodyError,
)
from boxer.core.scope import HelperScope
from boxer.registry import (
    BoxRegistry,
    box,
    clear,
    define,
    freeze,
    get_registry,
    ship,
)

__all__ = [
    # Version
    "__version__",
    # Registry
    "BoxRegistry",
    "BoxBuilder",
    "ViewCompiler",
    "HelperScope",
    "define",
    "box",
    "ship",
    "freeze",
    "clear",
    "get_registry",
    # Config
    "BoxerConfig",
    "DEFAULT_PROD",
    "DEFAULT_DEV",
    # Errors
    "BoxerError",
    "DuplicateBoxError",
    "DuplicateViewError",
    "UnknownBoxError",
    "UnknownViewError",
    "UnknownParentViewError",
    "CyclicInheritanceError",
    "PreconditionFailedError",
    "UnknownHelperError",
    "ViewBodyError",
    "RegistryFrozenError",
    "ReservedHelperNameError",
]
