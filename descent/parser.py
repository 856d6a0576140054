"""
the syntax analyzer: a top-down, left-to-right, recursive-descent (LL(1)) parser.

    <PROGRAM>     ::= <STMT_LIST> $$
    <STMT_LIST>   ::= <STMT> <STMT_LIST> | <EMPTY>
    <STMT>        ::= <ID> := <EXPR> | read <ID> | write <EXPR> | <WHILE_STMT> | <DO_STMT> | <IF_STMT>
    <EXPR>        ::= <TERM> <TERM_TAIL>
    <TERM_TAIL>   ::= <ADD_OP> <TERM> <TERM_TAIL> | <EMPTY>
    <TERM>        ::= <FACTOR> <FACTOR_TAIL>
    <FACTOR_TAIL> ::= <MULT_OP> <FACTOR> <FACTOR_TAIL> | <EMPTY>
    <FACTOR>      ::= ( <EXPR> ) | <ID> | <NUMBER>
    <CONDITION>   ::= <EXPR> <RELATION> <EXPR>
    <WHILE_STMT>  ::= while <CONDITION> do <STMT_LIST> od
    <DO_STMT>     ::= do <STMT_LIST> until <CONDITION>
    <IF_STMT>     ::= if <CONDITION> then <STMT_LIST> else <STMT_LIST> fi

<ID> is any UNKNOWN-class word. every production boxes its own node before looking at the
lookahead, so a failed production still shows up in the graph.
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from . import config
from .codegen import CodeGenerator
from .errors import ParseError
from .lexer import LexicalStream
from .tokens import TokenKind
from .tree import TreeNode

logger = logging.getLogger(__name__)

# FIRST(<STMT>), in the order the alternatives are tried
STMT_FIRST = (
    TokenKind.UNKNOWN,
    TokenKind.READ,
    TokenKind.WRITE,
    TokenKind.WHILE,
    TokenKind.DO,
    TokenKind.IF,
)

# FIRST(<FACTOR>)
FACTOR_FIRST = (TokenKind.LEFTP, TokenKind.UNKNOWN, TokenKind.NUMBER)


@dataclass(frozen=True)
class ParseOutcome:
    code: str
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Parser:
    def __init__(self, lexer: LexicalStream, codegen: CodeGenerator):
        self.lexer = lexer
        self.codegen = codegen

    def analyze(self) -> ParseOutcome:
        """
        run the start rule inside the graph header/footer.

        a ParseError is caught here and nowhere else; by then the code generator has already
        closed the partial graph, so the outcome always carries an inspectable document.
        the derivation recurses once per statement and operator, so the interpreter's
        recursion limit is raised for the length of the session.
        """
        saved_limit = sys.getrecursionlimit()
        needed = min(saved_limit + config.FRAMES_PER_TOKEN * len(self.lexer), config.RECURSION_LIMIT_CAP)
        if needed > saved_limit:
            sys.setrecursionlimit(needed)

        root = self.codegen.write_header(config.ROOT_LABEL)
        try:
            self.program(root)
            self.codegen.write_footer()
        except ParseError as ex:
            logger.debug("%s", ex)
            return ParseOutcome(self.codegen.code, ex)
        except RecursionError:
            # the stack is unwound by now; report it like any other syntax error
            error = ParseError.too_deep(self.lexer.current_lexeme())
            self.codegen.close_with_error(root, error)
            logger.debug("%s", error)
            return ParseOutcome(self.codegen.code, error)
        finally:
            sys.setrecursionlimit(saved_limit)
        return ParseOutcome(self.codegen.code)

    # =========================================
    # productions
    # =========================================

    def program(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<PROGRAM>")
        self.stmt_list(node)
        # trailing input is an error too
        if self.lexer.current_kind() is not TokenKind.EOF:
            self.raise_error(node, TokenKind.EOF)

    def stmt_list(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<STMT_LIST>")
        if self.lexer.current_kind() in STMT_FIRST:
            self.stmt(node)
            self.stmt_list(node)
        else:
            self.empty(node)

    def stmt(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<STMT>")
        kind = self.lexer.current_kind()

        if kind is TokenKind.UNKNOWN:
            self.match(node, TokenKind.UNKNOWN)
            self.match(node, TokenKind.ASSIGNMENT)
            self.expr(node)
        elif kind is TokenKind.READ:
            self.match(node, TokenKind.READ)
            self.match(node, TokenKind.UNKNOWN)
        elif kind is TokenKind.WRITE:
            self.match(node, TokenKind.WRITE)
            self.expr(node)
        elif kind is TokenKind.WHILE:
            self.while_stmt(node)
        elif kind is TokenKind.DO:
            self.do_stmt(node)
        elif kind is TokenKind.IF:
            self.if_stmt(node)
        else:
            self.raise_error(node, *STMT_FIRST)

    def expr(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<EXPR>")
        self.term(node)
        self.term_tail(node)

    def term_tail(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<TERM_TAIL>")
        if self.lexer.current_kind() is TokenKind.ADD_OP:
            self.match(node, TokenKind.ADD_OP)
            self.term(node)
            self.term_tail(node)
        else:
            self.empty(node)

    def term(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<TERM>")
        self.factor(node)
        self.factor_tail(node)

    def factor_tail(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<FACTOR_TAIL>")
        if self.lexer.current_kind() is TokenKind.MULT_OP:
            self.match(node, TokenKind.MULT_OP)
            self.factor(node)
            self.factor_tail(node)
        else:
            self.empty(node)

    def factor(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<FACTOR>")
        kind = self.lexer.current_kind()

        if kind is TokenKind.LEFTP:
            self.match(node, TokenKind.LEFTP)
            self.expr(node)
            self.match(node, TokenKind.RIGHTP)
        elif kind is TokenKind.UNKNOWN:
            self.match(node, TokenKind.UNKNOWN)
        elif kind is TokenKind.NUMBER:
            self.match(node, TokenKind.NUMBER)
        else:
            self.raise_error(node, *FACTOR_FIRST)

    def condition(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<CONDITION>")
        self.expr(node)
        self.match(node, TokenKind.RELATION)
        self.expr(node)

    def while_stmt(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<WHILE_STMT>")
        self.match(node, TokenKind.WHILE)
        self.condition(node)
        self.match(node, TokenKind.DO)
        self.stmt_list(node)
        self.match(node, TokenKind.OD)

    def do_stmt(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<DO_STMT>")
        self.match(node, TokenKind.DO)
        self.stmt_list(node)
        self.match(node, TokenKind.UNTIL)
        self.condition(node)

    def if_stmt(self, parent: TreeNode):
        node = self.codegen.add_non_terminal(parent, "<IF_STMT>")
        self.match(node, TokenKind.IF)
        self.condition(node)
        self.match(node, TokenKind.THEN)
        self.stmt_list(node)
        self.match(node, TokenKind.ELSE)
        self.stmt_list(node)
        self.match(node, TokenKind.FI)

    # =========================================
    # terminals, epsilon, errors
    # =========================================

    def empty(self, parent: TreeNode):
        # only there to make the tree readable; consumes nothing
        self.codegen.add_empty(parent)

    def match(self, parent: TreeNode, expected: TokenKind):
        """
        consume the current token if it is of the expected kind; it is drawn as a boxed
        <KIND> node with the lexeme as its oval leaf. anything else aborts the parse.
        """
        if self.lexer.current_kind() is not expected:
            self.raise_error(parent, expected)

        kind_node = self.codegen.add_non_terminal(parent, f"<{expected.name}>")
        self.codegen.add_terminal(kind_node, self.lexer.current_lexeme())
        self.lexer.advance()

    def raise_error(self, parent: TreeNode, *expected: TokenKind):
        error = ParseError(expected, self.lexer.current_lexeme())
        self.codegen.syntax_error(parent, error)


# =========================================
# one-shot helpers
# =========================================

def analyze(lexer: LexicalStream, echo: Optional[Callable[[str], None]] = None) -> ParseOutcome:
    logger.debug("starting parse over %d tokens", len(lexer))
    return Parser(lexer, CodeGenerator(echo)).analyze()


def analyze_text(text: str, echo: Optional[Callable[[str], None]] = None) -> ParseOutcome:
    return analyze(LexicalStream.from_lines(text.splitlines()), echo)


def analyze_file(path: Union[str, Path], echo: Optional[Callable[[str], None]] = None) -> ParseOutcome:
    return analyze(LexicalStream.from_file(path), echo)
