"""
Boxer Core Module.

Contains the view compiler, helper scope, error taxonomy, and shared types.
"""

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
from boxer.core.types import Box, ResolvedStep, ResolvedView, ViewDefinition

__all__ = [
    # Compiler
    "ViewCompiler",
    "HelperScope",
    # Types
    "Box",
    "ViewDefinition",
    "ResolvedStep",
    "ResolvedView",
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
