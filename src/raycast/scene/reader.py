"""Single-pass reader for the scene description format.

The input is one array of objects. Every object starts with a ``"type"``
key naming a camera, sphere or plane; the remaining key/value pairs set the
object's properties:

    [
        {"type": "camera", "width": 2.0, "height": 2.0},
        {"type": "sphere", "position": [0, 1, 5], "radius": 2,
         "color": [1, 0, 0]},
        {"type": "plane", "position": [0, -1, 0], "normal": [0, 1, 0],
         "color": [0, 0, 1]}
    ]

The reader is a hand-written lexer and parser working on one character of
lookahead. It validates each property against the kind of the object it is
assigned to, as it is read, and fails on the first problem with the line and
column of the offending token. There is no recovery: a scene either reads
completely or not at all.

Property rules:

    key       allowed on       domain
    width     camera           > 0
    height    camera           > 0
    radius    sphere           > 0
    color     sphere, plane    each component in [0, 1]
    position  sphere, plane    any vector
    normal    plane            normalized when read

Example:
    >>> from raycast.scene.reader import read_scene
    >>> scene = read_scene('[{"type": "camera", "width": 1, "height": 1}]')
    >>> scene.camera.width
    1.0
"""

from __future__ import annotations

import logging
import math
import os
import re
from typing import Any

from raycast.errors import (
    SceneIOError,
    SceneSemanticError,
    SceneSyntaxError,
    SceneValidationError,
    SemanticErrorKind,
)
from raycast.scene.model import Camera, ObjectKind, Plane, Scene, Shape, Sphere, Vector3

logger = logging.getLogger(__name__)

# Longest string literal accepted by the lexer
MAX_STRING_LENGTH = 128

_TYPE_NAMES = {
    "camera": ObjectKind.CAMERA,
    "sphere": ObjectKind.SPHERE,
    "plane": ObjectKind.PLANE,
}

# Properties each object kind accepts
_ALLOWED_KINDS = {
    "width": (ObjectKind.CAMERA,),
    "height": (ObjectKind.CAMERA,),
    "radius": (ObjectKind.SPHERE,),
    "color": (ObjectKind.SPHERE, ObjectKind.PLANE),
    "position": (ObjectKind.SPHERE, ObjectKind.PLANE),
    "normal": (ObjectKind.PLANE,),
}

_VECTOR_PROPERTIES = frozenset({"color", "position", "normal"})

# Properties that must be set exactly once per object, in reporting order
_REQUIRED = {
    ObjectKind.CAMERA: ("width", "height"),
    ObjectKind.SPHERE: ("position", "radius", "color"),
    ObjectKind.PLANE: ("position", "normal", "color"),
}

_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _is_space(c: str) -> bool:
    return c != "" and c in " \t\n\r\f\v"


class SceneReader:
    """Parser state for one scene description.

    The reader owns its cursor and line/column counters, so independent
    readers never share diagnostics state.

    Attributes:
        text: The full scene description being read.
        line: Current 1-based line number.
        column: Current 1-based column number.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self._pos = 0
        self.line = 1
        self.column = 1

    # =========================================================================
    # Lexical layer
    # =========================================================================

    def _syntax_error(self, message: str, line: int | None = None, column: int | None = None):
        return SceneSyntaxError(
            message,
            self.line if line is None else line,
            self.column if column is None else column,
        )

    def _peek(self) -> str:
        """Return the next character without consuming it ("" at end)."""
        if self._pos >= len(self.text):
            return ""
        return self.text[self._pos]

    def _next_c(self) -> str:
        """Consume one character, tracking line numbers.

        Raises:
            SceneSyntaxError: At end of input.
        """
        if self._pos >= len(self.text):
            raise self._syntax_error("Unexpected end of file")
        c = self.text[self._pos]
        self._pos += 1
        if c == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return c

    def _expect_c(self, expected: str) -> None:
        line, column = self.line, self.column
        c = self._next_c()
        if c != expected:
            raise self._syntax_error(f"Expected '{expected}' but found '{c}'", line, column)

    def _skip_ws(self) -> None:
        while _is_space(self._peek()):
            self._next_c()

    def _next_string(self) -> str:
        """Read a double-quoted string literal."""
        line, column = self.line, self.column
        if self._next_c() != '"':
            raise self._syntax_error("Expected string", line, column)

        chars: list[str] = []
        c = self._next_c()
        while c != '"':
            if len(chars) >= MAX_STRING_LENGTH:
                raise self._syntax_error(
                    f"Strings longer than {MAX_STRING_LENGTH} characters are not supported",
                    line,
                    column,
                )
            if c == "\\":
                raise self._syntax_error("Strings with escape codes are not supported")
            if not 32 <= ord(c) <= 126:
                raise self._syntax_error("Strings may contain only printable ASCII characters")
            chars.append(c)
            c = self._next_c()
        return "".join(chars)

    def _next_number(self) -> float:
        """Read a decimal floating point literal."""
        if self._pos >= len(self.text):
            raise self._syntax_error("Unexpected end of file")
        line, column = self.line, self.column
        match = _NUMBER_RE.match(self.text, self._pos)
        if match is None:
            raise self._syntax_error("Invalid number", line, column)
        value = float(match.group())
        if not math.isfinite(value):
            raise self._syntax_error("Invalid number", line, column)
        # Literals never span lines, so the column advances by the match length
        self._pos = match.end()
        self.column += len(match.group())
        return value

    def _next_vector(self) -> Vector3:
        """Read exactly ``[number, number, number]``."""
        self._expect_c("[")
        values: list[float] = []
        for i in range(3):
            self._skip_ws()
            values.append(self._next_number())
            self._skip_ws()
            self._expect_c("," if i < 2 else "]")
        return Vector3(*values)

    # =========================================================================
    # Grammar layer
    # =========================================================================

    def read(self) -> Scene:
        """Parse the whole input into a Scene.

        Returns:
            The parsed scene.

        Raises:
            SceneSyntaxError: On any grammar or lexical violation.
            SceneSemanticError: On a duplicate camera, unknown type or
                property, or a property on the wrong kind of object.
            SceneValidationError: On a value outside its allowed domain.
        """
        camera: Camera | None = None
        shapes: list[Shape] = []

        self._skip_ws()
        self._expect_c("[")
        self._skip_ws()

        while True:
            line, column = self.line, self.column
            c = self._next_c()
            if c == "]":
                # Empty array, or a trailing comma after the last object
                break
            if c != "{":
                raise self._syntax_error(f"Unexpected character '{c}'", line, column)

            obj = self._read_object(line, column, camera is not None)
            if isinstance(obj, Camera):
                camera = obj
            else:
                shapes.append(obj)

            self._skip_ws()
            line, column = self.line, self.column
            c = self._next_c()
            if c == ",":
                self._skip_ws()
            elif c == "]":
                break
            else:
                raise self._syntax_error("Expected ',' or ']'", line, column)

        self._skip_ws()
        if self._pos < len(self.text):
            raise self._syntax_error("Unexpected content after the end of the scene")

        scene = Scene(camera=camera, shapes=tuple(shapes))
        logger.debug(
            "Read scene: camera=%s, %d spheres, %d planes",
            camera is not None,
            scene.sphere_count,
            scene.plane_count,
        )
        return scene

    def _read_object(self, line: int, column: int, have_camera: bool) -> Camera | Shape:
        """Read one object after its opening brace.

        Args:
            line: Line of the opening brace.
            column: Column of the opening brace.
            have_camera: Whether a camera has already been declared.
        """
        self._skip_ws()
        key_line, key_column = self.line, self.column
        key = self._next_string()
        if key != "type":
            raise self._syntax_error('Expected "type" key', key_line, key_column)

        self._skip_ws()
        self._expect_c(":")
        self._skip_ws()

        type_line, type_column = self.line, self.column
        type_name = self._next_string()
        kind = _TYPE_NAMES.get(type_name)
        if kind is None:
            raise SceneSemanticError(
                SemanticErrorKind.UNKNOWN_TYPE,
                f'Unknown type, "{type_name}"',
                type_line,
                type_column,
            )
        if kind == ObjectKind.CAMERA and have_camera:
            raise SceneSemanticError(
                SemanticErrorKind.DUPLICATE_CAMERA,
                "Second camera found",
                line,
                column,
            )

        properties: dict[str, Any] = {}
        self._skip_ws()
        while True:
            sep_line, sep_column = self.line, self.column
            c = self._next_c()
            if c == "}":
                break
            if c != ",":
                raise self._syntax_error(f"Expected ',' or '}}' but found '{c}'", sep_line, sep_column)

            self._skip_ws()
            prop_line, prop_column = self.line, self.column
            key = self._next_string()
            self._skip_ws()
            self._expect_c(":")
            self._skip_ws()
            self._read_property(kind, key, properties, prop_line, prop_column)
            self._skip_ws()

        return self._build(kind, type_name, properties, line, column)

    def _read_property(
        self,
        kind: ObjectKind,
        key: str,
        properties: dict[str, Any],
        line: int,
        column: int,
    ) -> None:
        """Read the value for ``key`` and validate it against ``kind``."""
        allowed = _ALLOWED_KINDS.get(key)
        if allowed is None:
            raise SceneSemanticError(
                SemanticErrorKind.UNKNOWN_PROPERTY,
                f'Unknown property, "{key}"',
                line,
                column,
            )

        value_line, value_column = self.line, self.column
        value: Any
        if key in _VECTOR_PROPERTIES:
            value = self._next_vector()
        else:
            value = self._next_number()

        if kind not in allowed:
            raise SceneSemanticError(
                SemanticErrorKind.PROPERTY_NOT_APPLICABLE,
                f'Property "{key}" applied to a {kind.name.lower()} object',
                line,
                column,
            )
        if key in properties:
            raise SceneSemanticError(
                SemanticErrorKind.DUPLICATE_PROPERTY,
                f'Property "{key}" set more than once',
                line,
                column,
            )

        if key in ("width", "height", "radius"):
            if value <= 0:
                raise SceneValidationError(
                    key, value, f"Invalid {key} {value!r}, must be positive", value_line, value_column
                )
        elif key == "color":
            if any(component < 0.0 or component > 1.0 for component in value):
                raise SceneValidationError(
                    key,
                    value,
                    f"Invalid color {tuple(value)!r}, components must be in [0, 1]",
                    value_line,
                    value_column,
                )
        elif key == "normal":
            try:
                value = value.normalized()
            except (ZeroDivisionError, ValueError):
                raise SceneValidationError(
                    key, value, "Invalid normal, must be a finite non-zero vector", value_line, value_column
                ) from None

        properties[key] = value

    def _build(
        self,
        kind: ObjectKind,
        type_name: str,
        properties: dict[str, Any],
        line: int,
        column: int,
    ) -> Camera | Shape:
        """Construct the object once its closing brace has been read."""
        for name in _REQUIRED[kind]:
            if name not in properties:
                raise SceneSemanticError(
                    SemanticErrorKind.MISSING_PROPERTY,
                    f'Missing property "{name}" for {type_name} object',
                    line,
                    column,
                )

        if kind == ObjectKind.CAMERA:
            return Camera(**properties)
        if kind == ObjectKind.SPHERE:
            return Sphere(**properties)
        return Plane(**properties)


def read_scene(text: str) -> Scene:
    """Parse a scene description.

    Args:
        text: The scene description.

    Returns:
        The parsed, immutable Scene.

    Raises:
        SceneSyntaxError: On any grammar or lexical violation.
        SceneSemanticError: On a semantic violation.
        SceneValidationError: On a value outside its allowed domain.
    """
    return SceneReader(text).read()


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and parse a scene description file.

    Args:
        path: Path to the scene file.

    Returns:
        The parsed Scene.

    Raises:
        SceneIOError: If the file cannot be opened or decoded.
        SceneSyntaxError: On any grammar or lexical violation.
        SceneSemanticError: On a semantic violation.
        SceneValidationError: On a value outside its allowed domain.
    """
    filename = os.fspath(path)
    try:
        with open(filename, encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SceneIOError(filename, str(e)) from e

    logger.debug("Loaded %d characters from %s", len(text), filename)
    return read_scene(text)
