"""
a *fake* (overly simplified) lexical analyzer.

it does not lex on a dfa-based state machine; it only separates lexemes delimited by
whitespace ([space|tab|CR|LF]) and classifies each one. a real lexer would tokenize on far
more sophisticated lexical rules.
"""

import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Deque, Iterable, List, Union

from . import config
from .tokens import TokenKind, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    lexeme: str
    kind: TokenKind

    @classmethod
    def from_lexeme(cls, lexeme: str) -> "Token":
        return cls(lexeme, classify(lexeme))

    def __str__(self) -> str:
        return f"{{lexeme={self.lexeme}, token={self.kind.name}}}"


# =========================================
# preprocessing
# =========================================

def strip_comment_lines(lines: Iterable[str], marker: str = config.COMMENT_MARKER) -> str:
    """
    drop lines starting with the comment marker and join the rest on a single space,
    so the grammar never has to deal with end-of-line markers.
    """
    kept = (line.strip() for line in lines)
    return " ".join(line for line in kept if not line.startswith(marker))


def tokenize(text: str) -> List[Token]:
    # split on runs of whitespace, keep the order
    return [Token.from_lexeme(word) for word in text.split()]


# =========================================
# the token stream
# =========================================

class LexicalStream:
    """
    lookahead-1 queue of classified tokens.

    consuming is monotonic: there is no pushback, so the parser must pick every
    alternative from the current token alone. peeking at an empty stream yields EOF.
    """

    def __init__(self, text: str):
        self._tokens: Deque[Token] = deque(tokenize(text))
        logger.debug("tokenized %d lexemes", len(self._tokens))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LexicalStream":
        return cls(strip_comment_lines(lines))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "LexicalStream":
        # OSError propagates; the caller decides what an unreadable file means
        with open(path, encoding="utf-8") as f:
            return cls.from_lines(f)

    @property
    def tokens(self) -> List[Token]:
        """the tokens not consumed yet."""
        return list(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def current_kind(self) -> TokenKind:
        return self._tokens[0].kind if self._tokens else TokenKind.EOF

    def current_lexeme(self) -> str:
        if self.current_kind() is TokenKind.EOF:
            return config.EOF_LEXEME
        return self._tokens[0].lexeme

    def advance(self) -> None:
        # no-op once exhausted
        if self._tokens:
            self._tokens.popleft()

    def __repr__(self) -> str:
        return "[" + ", ".join(str(t) for t in self._tokens) + "]"
