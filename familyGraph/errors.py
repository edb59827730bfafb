"""Exception types raised by the graph pipeline."""

from __future__ import annotations


class FormatError(ValueError):
    """Raised when bytes do not parse, or a graph cannot be rendered, in a syntax."""

    def __init__(
        self,
        syntax: str,
        message: str,
        *,
        source: str | None = None,
        action: str = "parse",
    ) -> None:
        self.syntax = syntax
        self.source = source
        self.action = action
        where = f" in {source}" if source else ""
        super().__init__(f"Cannot {action} {syntax}{where}: {message}")


class GraphIOError(OSError):
    """Raised when a graph file cannot be opened for reading or writing."""

    def __init__(self, path: object, mode: str, reason: str) -> None:
        self.path = path
        self.mode = mode
        self.reason = reason
        super().__init__(f"Cannot open {path} for {mode}: {reason}")


class AgeValueError(TypeError):
    """Raised when an age literal is not a well-formed integer."""

    def __init__(self, subject: object, value: object) -> None:
        self.subject = subject
        self.value = value
        super().__init__(f"Age of {subject} is not an integer: {value!r}")


class SeedFormatError(ValueError):
    """Raised when a seed record is missing fields or holds bad values."""

    def __init__(self, section: str, index: int | None, message: str) -> None:
        self.section = section
        self.index = index
        where = section if index is None else f"{section}[{index}]"
        super().__init__(f"Invalid seed record {where}: {message}")


class UnknownPersonError(KeyError):
    """Raised when a seed relationship names a person key that was never added."""

    def __init__(self, key: str, section: str) -> None:
        self.key = key
        self.section = section
        super().__init__(key)

    def __str__(self) -> str:
        return f"Seed {self.section} reference unknown person '{self.key}'"


class UnresolvedPrefixError(KeyError):
    """Raised when a namespace alias has no binding and strict mode is on."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(alias)

    def __str__(self) -> str:
        return f"Namespace prefix '{self.alias}' is not bound in the graph"


__all__ = [
    "FormatError",
    "GraphIOError",
    "AgeValueError",
    "SeedFormatError",
    "UnknownPersonError",
    "UnresolvedPrefixError",
]
