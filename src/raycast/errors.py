"""Exception hierarchy for scene reading and rendering.

All failures are fatal for the call that raised them: the reader never
returns a partial scene and the renderer never renders a scene it cannot
honor. The command-line layer is the only place these are caught.

Hierarchy:
    RaycastError
        SceneError                 (line/column context)
            SceneIOError           input could not be opened or read
            SceneSyntaxError       grammar or lexical violation, early EOF
            SceneSemanticError     duplicate camera, unknown type/property...
            SceneValidationError   numeric field outside its domain
        MissingCameraError         render requested without a camera
        ShapeCapacityError         scene larger than the shape table
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class SemanticErrorKind(Enum):
    """Categories of semantic errors raised by the scene reader."""

    DUPLICATE_CAMERA = "duplicate camera"
    UNKNOWN_TYPE = "unknown type"
    UNKNOWN_PROPERTY = "unknown property"
    PROPERTY_NOT_APPLICABLE = "property not applicable"
    DUPLICATE_PROPERTY = "duplicate property"
    MISSING_PROPERTY = "missing property"


class RaycastError(Exception):
    """Base class for all errors raised by this package."""


class SceneError(RaycastError):
    """Error raised while reading a scene description.

    Attributes:
        message: The bare error message, without position information.
        line: 1-based line of the offending token, or None if unknown.
        column: 1-based column of the offending token, or None if unknown.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line is None:
            return self.message
        if self.column is None:
            return f"{self.message} on line {self.line}"
        return f"{self.message} on line {self.line}, column {self.column}"


class SceneIOError(SceneError):
    """The scene file could not be opened or read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'Could not open file "{path}": {reason}')


class SceneSyntaxError(SceneError):
    """The scene text violates the grammar."""


class SceneSemanticError(SceneError):
    """The scene text is well formed but describes an invalid object graph.

    Attributes:
        kind: Which semantic rule was violated.
    """

    def __init__(
        self,
        kind: SemanticErrorKind,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.kind = kind
        super().__init__(message, line, column)


class SceneValidationError(SceneError, ValueError):
    """A numeric field is outside its allowed domain.

    Attributes:
        field: Name of the offending property (e.g. "radius").
        value: The rejected value as read from the scene.
    """

    def __init__(
        self,
        field: str,
        value: Any,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message, line, column)


class MissingCameraError(RaycastError):
    """A render was requested for a scene that declares no camera."""


class ShapeCapacityError(RaycastError):
    """The scene has more shapes than the GPU-side shape table can hold."""
