"""
Recursive-descent parser and validator for scene descriptions.

Grammar:

    scene       := definition+
    definition  := identifier '{' NEWLINE assignment+ '}'
    assignment  := identifier '=' value NEWLINE
    value       := number | string | identifier | tuple
    tuple       := '(' number ',' number ',' number ')'

Parsing stops at the first problem; nothing is returned for a scene that
does not load cleanly.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .lexer import TokenKind, tokenize

logger = logging.getLogger(__name__)

Triple = Tuple[float, float, float]


class SceneError(Exception):
    """Base class for everything that can go wrong loading a scene."""


class LexError(SceneError):
    """The source contained a character that starts no token."""


class SceneSyntaxError(SceneError):
    """The token stream does not match the grammar."""


class SemanticError(SceneError):
    """A well-formed definition that is invalid for its kind."""


# --- validated definitions ---

@dataclass(frozen=True)
class Definition:
    """One top-level block of a scene file."""


@dataclass(frozen=True)
class WindowDef(Definition):
    title: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None


@dataclass(frozen=True)
class AmbientLightDef(Definition):
    intensity: float


@dataclass(frozen=True)
class PointLightDef(Definition):
    intensity: float
    position: Triple


@dataclass(frozen=True)
class DirectionLightDef(Definition):
    intensity: float
    direction: Triple


@dataclass(frozen=True)
class SphereDef(Definition):
    color: Triple
    center: Triple
    radius: float


# --- raw structure ---

class Value:
    NUMBER = "number"
    STRING = "string"
    TUPLE = "tuple"

    def __init__(self, kind, data):
        self.kind = kind
        self.data = data

    def __repr__(self):
        if self.kind == Value.STRING:
            return 'string "%s"' % self.data
        if self.kind == Value.TUPLE:
            return "tuple (%s)" % ", ".join(_describe_number(n) for n in self.data)
        return "number %s" % _describe_number(self.data)


class Assignment:
    def __init__(self, name, value, token):
        self.name = name
        self.value = value
        self.token = token


class RawDefinition:
    def __init__(self, def_type, assignments, token):
        self.def_type = def_type
        self.assignments = assignments
        self.token = token


# --- parser ---

class Parser:

    def __init__(self, src):
        """Create a parser over the given scene text.

        Parameters:
          src : str -- the full scene description
        """
        self.tokens = tokenize(src)
        self.position = 0

    def peek(self):
        """Return the next token without consuming it, or None at EOF."""
        if self.position >= len(self.tokens):
            return None
        return self.tokens[self.position]

    def next(self):
        """Consume and return the next token, or None at EOF.

        Error tokens abort parsing as soon as they are reached.
        """
        token = self.peek()
        if token is None:
            return None
        self.position += 1
        if token.kind is TokenKind.ERROR:
            raise LexError("Unrecognized character '%s' at line %d, column %d"
                           % (token.value, token.line, token.column))
        return token

    def parse(self):
        """Parse the whole source into a list of validated definitions."""
        definitions = []
        self.munch_newlines()
        while self.peek() is not None:
            raw = self.parse_raw_definition()
            definition = from_raw(raw)
            logger.debug("parsed %r", definition)
            definitions.append(definition)
            self.munch_newlines()
        if not definitions:
            raise SceneSyntaxError("A scene needs at least one definition")
        return definitions

    def munch_newlines(self):
        while self.peek() is not None and self.peek().kind is TokenKind.NEWLINE:
            self.next()

    def parse_raw_definition(self):
        start = self.expect_ident("Object definitions should start with a definition type")
        self.expect(TokenKind.LBRACE, "A definition should be opened by a curly brace '{'")
        self.expect(TokenKind.NEWLINE, "Expected a newline after '{'")
        self.munch_newlines()
        assignments = [self.parse_assignment()]
        while True:
            token = self.peek()
            if token is None:
                raise SceneSyntaxError("Unexpected EOF when parsing %s definition"
                                       % start.value)
            if token.kind is TokenKind.NEWLINE:
                self.next()
            elif token.kind is TokenKind.RBRACE:
                self.next()
                break
            elif token.kind is TokenKind.IDENTIFIER:
                assignments.append(self.parse_assignment())
            else:
                # surfaces ERROR tokens as LexError
                self.next()
                raise SceneSyntaxError(
                    "Unexpected %s when parsing definition; expected assignment "
                    "or closing brace" % token.describe())
        return RawDefinition(start.value, assignments, start)

    def parse_assignment(self):
        name = self.expect_ident("Assignments should start with identifiers")
        self.expect(TokenKind.EQUAL, "Expected = when parsing assignment")
        value = self.parse_value()
        self.expect(TokenKind.NEWLINE, "Expect assignments to be terminated by newlines")
        return Assignment(name.value, value, name)

    def parse_value(self):
        token = self.next()
        if token is None:
            raise SceneSyntaxError("Unexpected EOF when parsing a value")
        if token.kind is TokenKind.NUMBER:
            return Value(Value.NUMBER, token.value)
        if token.kind in (TokenKind.STRING, TokenKind.IDENTIFIER):
            return Value(Value.STRING, token.value)
        if token.kind is TokenKind.LPAREN:
            return self.parse_tuple()
        raise SceneSyntaxError("Invalid value: %s" % token.describe())

    def parse_tuple(self):
        first = self.expect_number("Tuples can only contain numbers")
        self.expect(TokenKind.COMMA, "Expected a comma to separate values in tuple")
        second = self.expect_number("Tuples can only contain numbers")
        self.expect(TokenKind.COMMA, "Expected a comma to separate values in tuple")
        third = self.expect_number("Tuples can only contain numbers")
        self.expect(TokenKind.RPAREN, "Expected a right paren to close tuple")
        return Value(Value.TUPLE, (first, second, third))

    def expect(self, kind, failed_match):
        token = self.next()
        if token is None:
            raise SceneSyntaxError("Expected %s but got EOF" % kind.name.lower())
        if token.kind is not kind:
            raise SceneSyntaxError("Error: %s on %s" % (failed_match, token.describe()))
        return token

    def expect_number(self, err):
        return self.expect(TokenKind.NUMBER, err).value

    def expect_ident(self, err):
        return self.expect(TokenKind.IDENTIFIER, err)


def parse(src):
    """Parse scene text into an ordered list of Definitions.

    Raises a SceneError subclass describing the first problem found.
    """
    return Parser(src).parse()


# --- validation ---

def from_raw(raw):
    """Turn a raw key/value block into its typed Definition."""
    validator = _VALIDATORS.get(raw.def_type)
    if validator is None:
        raise SemanticError("Unsupported definition type: %s (line %d); expected one of [%s]"
                            % (raw.def_type, raw.token.line, ", ".join(_VALIDATORS)))
    return validator(raw)


def _collect(raw, allowed):
    """Map property name to Value, rejecting names not in `allowed`."""
    props = {}
    for assignment in raw.assignments:
        if assignment.name not in allowed:
            raise SemanticError("Expected properties: [%s] but got: '%s' (line %d)"
                                % (", ".join(allowed), assignment.name, assignment.token.line))
        props[assignment.name] = assignment.value
    return props


def numeric_value(value, prop):
    if value.kind != Value.NUMBER:
        raise SemanticError("Expected number for property %s but got %r" % (prop, value))
    if not math.isfinite(value.data):
        raise SemanticError("Property %s must be finite" % prop)
    return value.data


def string_value(value, prop):
    if value.kind != Value.STRING:
        raise SemanticError("Expected string for property %s but got %r" % (prop, value))
    return value.data


def tuple_value(value, prop):
    if value.kind != Value.TUPLE:
        raise SemanticError("Expected tuple for property %s but got %r" % (prop, value))
    if not all(math.isfinite(n) for n in value.data):
        raise SemanticError("Property %s must be finite" % prop)
    return value.data


def window_from_raw(raw):
    props = _collect(raw, ("width", "height", "title"))
    title = width = height = None
    if "title" in props:
        title = string_value(props["title"], "title")
    if "width" in props:
        width = numeric_value(props["width"], "width")
        if width < 1:
            raise SemanticError("Window width must be at least 1 but got %s"
                                % _format_number(width))
    if "height" in props:
        height = numeric_value(props["height"], "height")
        if height < 1:
            raise SemanticError("Window height must be at least 1 but got %s"
                                % _format_number(height))
    return WindowDef(title=title, width=width, height=height)


def light_from_raw(raw):
    props = _collect(raw, ("type", "intensity", "position", "direction"))
    if "type" not in props or "intensity" not in props:
        raise SemanticError("light definitions require a type and an intensity (line %d)"
                            % raw.token.line)
    light_type = string_value(props["type"], "type")
    intensity = numeric_value(props["intensity"], "intensity")
    if intensity < 0:
        raise SemanticError("Light intensity must not be negative but got %s"
                            % _format_number(intensity))

    if light_type == "ambient":
        if "position" in props or "direction" in props:
            raise SemanticError("Only type and intensity are supported for ambient lights")
        return AmbientLightDef(intensity=intensity)
    if light_type == "point":
        if "position" not in props:
            raise SemanticError("point lights require a position")
        if "direction" in props:
            raise SemanticError("point lights do not support the direction property")
        return PointLightDef(intensity=intensity,
                             position=tuple_value(props["position"], "position"))
    if light_type == "directional":
        if "direction" not in props:
            raise SemanticError("directional lights require a direction")
        if "position" in props:
            raise SemanticError("directional lights do not support the position property")
        return DirectionLightDef(intensity=intensity,
                                 direction=tuple_value(props["direction"], "direction"))
    raise SemanticError("Unsupported light type: %s; expected one of [ambient, point, directional]"
                        % light_type)


def sphere_from_raw(raw):
    required = ("color", "center", "radius")
    props = _collect(raw, required)
    missing = [name for name in required if name not in props]
    if missing:
        raise SemanticError("Sphere definitions require [color, center, radius] but %s %s missing"
                            % (", ".join(missing), "is" if len(missing) == 1 else "are"))
    radius = numeric_value(props["radius"], "radius")
    if radius <= 0:
        raise SemanticError("Sphere radius must be positive but got %s" % _format_number(radius))
    return SphereDef(color=tuple_value(props["color"], "color"),
                     center=tuple_value(props["center"], "center"),
                     radius=radius)


_VALIDATORS = {
    "window": window_from_raw,
    "light": light_from_raw,
    "sphere": sphere_from_raw,
}


# --- writing definitions back out ---

def _format_number(n):
    """Shortest positional text for n that the lexer reads back exactly."""
    n = float(n)
    if not math.isfinite(n):
        raise ValueError("Cannot write non-finite number %r" % n)
    return np.format_float_positional(n, unique=True, trim="-")


def _describe_number(n):
    return _format_number(n) if math.isfinite(n) else str(n)


def _format_tuple(t):
    return "(%s)" % ", ".join(_format_number(n) for n in t)


def _format_string(s):
    if '"' in s:
        raise ValueError("Strings cannot contain double quotes: %r" % s)
    return '"%s"' % s


def format_definition(definition):
    """Render a single Definition as a block of scene text."""
    if isinstance(definition, WindowDef):
        kind = "window"
        lines = []
        if definition.title is not None:
            lines.append(("title", _format_string(definition.title)))
        if definition.width is not None:
            lines.append(("width", _format_number(definition.width)))
        if definition.height is not None:
            lines.append(("height", _format_number(definition.height)))
        if not lines:
            # the grammar wants at least one assignment
            raise ValueError("An empty window definition cannot be written")
    elif isinstance(definition, AmbientLightDef):
        kind = "light"
        lines = [("type", "ambient"), ("intensity", _format_number(definition.intensity))]
    elif isinstance(definition, PointLightDef):
        kind = "light"
        lines = [("type", "point"), ("intensity", _format_number(definition.intensity)),
                 ("position", _format_tuple(definition.position))]
    elif isinstance(definition, DirectionLightDef):
        kind = "light"
        lines = [("type", "directional"), ("intensity", _format_number(definition.intensity)),
                 ("direction", _format_tuple(definition.direction))]
    elif isinstance(definition, SphereDef):
        kind = "sphere"
        lines = [("color", _format_tuple(definition.color)),
                 ("center", _format_tuple(definition.center)),
                 ("radius", _format_number(definition.radius))]
    else:
        raise TypeError("Not a scene definition: %r" % (definition,))

    body = "".join("%s = %s\n" % line for line in lines)
    return "%s {\n%s}\n" % (kind, body)


def format_definitions(definitions):
    """Render definitions as scene text that parse() reads back unchanged."""
    return "".join(format_definition(d) for d in definitions)
