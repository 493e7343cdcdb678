"""Error taxonomy for alias tokenizing, expansion, and definition."""

from __future__ import annotations

from collections.abc import Sequence


class MacroError(ValueError):
    """Base class for recoverable alias failures."""


class MalformedExpansionError(MacroError):
    """Raised when an expansion string has an unterminated quote."""

    def __init__(self, expansion: str, reason: str = "unclosed quote") -> None:
        self.expansion = expansion
        self.reason = reason
        super().__init__(f"invalid alias expansion: {reason}")


class AliasCycleError(MacroError):
    """Raised when expanding an alias revisits a name already being expanded."""

    def __init__(self, chain: Sequence[str], message: str | None = None) -> None:
        self.chain = tuple(chain)
        super().__init__(message or f"alias recursion detected: {' -> '.join(self.chain)}")


class AliasDepthExceededError(AliasCycleError):
    """Raised when an expansion chain is longer than the fixed bound."""

    def __init__(self, chain: Sequence[str], limit: int) -> None:
        self.limit = limit
        super().__init__(chain, f"alias expansion exceeded max depth ({limit})")


class EmptyExpansionError(MacroError):
    """Raised when an alias expands to no tokens at all."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"alias {name!r} expands to an empty command")


class AliasDefinitionError(MacroError):
    """Raised when an alias cannot be stored or removed."""


class InvalidAliasNameError(AliasDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"invalid alias name {name!r}: must start with a letter and contain only "
            "letters, digits, and '-'"
        )


class ReservedAliasNameError(AliasDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"alias name {name!r} conflicts with a built-in command")


class AliasConflictError(AliasDefinitionError):
    def __init__(self, name: str, existing: str) -> None:
        self.name = name
        self.existing = existing
        super().__init__(
            f"alias {name!r} already expands to {existing!r}; use --clobber to overwrite"
        )


class AliasNotFoundError(AliasDefinitionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"alias not found: {name}")


__all__ = [
    "AliasConflictError",
    "AliasCycleError",
    "AliasDefinitionError",
    "AliasDepthExceededError",
    "AliasNotFoundError",
    "EmptyExpansionError",
    "InvalidAliasNameError",
    "MacroError",
    "MalformedExpansionError",
    "ReservedAliasNameError",
]
