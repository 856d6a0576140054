"""
descent: an educational recursive-descent syntax analyzer that writes its derivation
as a graphviz parse tree.
"""

from .codegen import CodeGenerator
from .errors import ParseError
from .lexer import LexicalStream, Token, tokenize
from .parser import ParseOutcome, Parser, analyze, analyze_file, analyze_text
from .tokens import TokenKind, classify
from .tree import NodeFactory, TreeNode

__all__ = [
    "CodeGenerator",
    "LexicalStream",
    "NodeFactory",
    "ParseError",
    "ParseOutcome",
    "Parser",
    "Token",
    "TokenKind",
    "TreeNode",
    "analyze",
    "analyze_file",
    "analyze_text",
    "classify",
    "tokenize",
]
