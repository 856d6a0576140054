"""
token kinds of the analyzer and the classifier that maps a raw lexeme onto one of them.

this is part of a "fake" tokenizer: handed a whitespace-delimited word it simply resolves
to the kind whose lexeme list contains that word. several kinds own more than one lexeme
(ADD_OP, MULT_OP, RELATION); three kinds own none and are picked by rule instead:
  - EOF:     empty / whitespace-only lexeme (displayed as $$)
  - NUMBER:  digit+ ('.' digit+)?
  - UNKNOWN: everything else; stands in for an identifier
"""

import enum
import re
from typing import Dict, Tuple


class TokenKind(enum.Enum):
    WRITE      = "WRITE"
    READ       = "READ"
    IF         = "IF"
    THEN       = "THEN"
    ELSE       = "ELSE"
    FI         = "FI"
    WHILE      = "WHILE"
    DO         = "DO"
    OD         = "OD"
    UNTIL      = "UNTIL"
    LEFTP      = "LEFTP"
    RIGHTP     = "RIGHTP"
    ASSIGNMENT = "ASSIGNMENT"
    ADD_OP     = "ADD_OP"
    MULT_OP    = "MULT_OP"
    RELATION   = "RELATION"
    EOF        = "$$"
    UNKNOWN    = "UNKNOWN"
    NUMBER     = "NUMBER"

    @property
    def lexemes(self) -> Tuple[str, ...]:
        return LEXEMES.get(self, ())

    def __str__(self) -> str:
        return self.value


# literal lexemes per kind; the sets must stay disjoint
LEXEMES: Dict[TokenKind, Tuple[str, ...]] = {
    TokenKind.WRITE:      ("write",),
    TokenKind.READ:       ("read",),
    TokenKind.IF:         ("if",),
    TokenKind.THEN:       ("then",),
    TokenKind.ELSE:       ("else",),
    TokenKind.FI:         ("fi",),
    TokenKind.WHILE:      ("while",),
    TokenKind.DO:         ("do",),
    TokenKind.OD:         ("od",),
    TokenKind.UNTIL:      ("until",),
    TokenKind.LEFTP:      ("(",),
    TokenKind.RIGHTP:     (")",),
    TokenKind.ASSIGNMENT: (":=",),
    TokenKind.ADD_OP:     ("+", "-"),
    TokenKind.MULT_OP:    ("*", "/"),
    TokenKind.RELATION:   ("<", ">", "<=", ">=", "=", "!="),
}

# digits, optionally one '.' followed by more digits (no sign handling)
NUMBER_RE = re.compile(r"\d+(?:\.\d+)?", re.ASCII)


def classify(lexeme: str) -> TokenKind:
    """
    resolve a lexeme to its token kind. total: never raises, falls back to UNKNOWN.
    """
    lexeme = lexeme.strip()

    # nothing left means no more tokens to process
    if not lexeme:
        return TokenKind.EOF

    if NUMBER_RE.fullmatch(lexeme):
        return TokenKind.NUMBER

    # first match wins; deterministic since the lexeme sets are disjoint
    for kind in TokenKind:
        if lexeme in kind.lexemes:
            return kind

    return TokenKind.UNKNOWN
