"""The error raised for malformed or unsupported class file data."""

from __future__ import annotations

from collections.abc import Iterable


class ParseError(Exception):
    """A failure to parse class file data.

    ``msg`` describes what went wrong. ``contexts`` lists where it went wrong,
    from the innermost location to the outermost.
    """

    def __init__(self, msg: str, contexts: Iterable[str] = ()) -> None:
        self.msg = msg
        self.contexts: tuple[str, ...] = tuple(contexts)
        super().__init__(str(self))

    def with_context(self, context: str) -> ParseError:
        """Return a new error that also names the enclosing ``context``."""
        return ParseError(self.msg, (*self.contexts, context))

    def __str__(self) -> str:
        parts = [self.msg]
        connector = " for "
        for context in self.contexts:
            parts.append(f"{connector}{context}")
            connector = " of "
        return "".join(parts)

    def __repr__(self) -> str:
        return f"ParseError({self.msg!r}, contexts={self.contexts!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self.msg == other.msg and self.contexts == other.contexts

    def __hash__(self) -> int:
        return hash((self.msg, self.contexts))