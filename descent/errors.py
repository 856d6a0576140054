from typing import Iterable, Optional, Tuple

from .tokens import TokenKind


class ParseError(Exception):
    """
    raised when the input cannot be derived from the grammar.

    carries the kind(s) that would have been accepted and the lexeme actually found
    ("EOF" once the input is exhausted). there is no recovery: the first one aborts the parse.
    """

    def __init__(self, expected: Iterable[TokenKind], found: str, message: Optional[str] = None):
        self.expected: Tuple[TokenKind, ...] = tuple(expected)
        self.found = found
        super().__init__(message or self.describe(self.expected, found))

    @property
    def message(self) -> str:
        return str(self)

    @staticmethod
    def describe(expected: Tuple[TokenKind, ...], found: str) -> str:
        # str(kind) shows end of input as $$
        names = ", ".join(f"'{kind}'" for kind in expected)
        if len(expected) > 1:
            names = "one of " + names
        return f"SYNTAX ERROR: {names} was expected but '{found}' was found."

    @classmethod
    def too_deep(cls, found: str) -> "ParseError":
        return cls((), found, f"SYNTAX ERROR: derivation nested too deeply at '{found}'.")
