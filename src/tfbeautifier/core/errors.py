"""Exceptions raised by the graph beautifier pipeline."""

from __future__ import annotations


class BeautifierError(Exception):
    """Base class for all errors reported to the operator."""


class ParseError(BeautifierError):
    """Malformed DOT input."""

    def __init__(self, message: str, line: int, column: int, context: str = ""):
        self.line = line
        self.column = column
        self.context = context
        details = f"line {line}, column {column}: {message}"
        if context:
            details = f"{details}\n  {context}\n  {' ' * (column - 1)}^"
        super().__init__(details)


class PatternError(BeautifierError):
    """An exclusion or junk pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class GraphIOError(BeautifierError):
    """Opening, reading or writing a stream failed."""

    def __init__(self, operation: str, target: str, cause: OSError):
        self.operation = operation
        self.target = target
        super().__init__(f"Cannot {operation} {target}: {cause}")


class ConfigError(BeautifierError):
    """Invalid run configuration, e.g. an unknown output type."""


class RenderError(BeautifierError):
    """A renderer could not produce its output."""


class TemplateError(RenderError):
    """The HTML page template is malformed or lacks a required placeholder."""
