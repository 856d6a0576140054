"""
a *simulation* of a code generator that only emits graphviz (dot) text.

instead of building a whole tree in memory and traversing it at the end, every node and
edge is written out the moment the parser visits it (a single-pass compiler, in spirit).
shapes:
  - diamond: the root written by the header
  - rect:    non-terminals and the token-kind node above each terminal
  - oval:    terminal lexemes
  - none:    epsilon (EMPTY) leaves
"""

import logging
from typing import Callable, List, NoReturn, Optional

from . import config
from .errors import ParseError
from .tree import NodeFactory, TreeNode

logger = logging.getLogger(__name__)


def _escape(text: str) -> str:
    return str(text).replace("\\", "\\\\").replace('"', '\\"')


class CodeGenerator:
    """
    writes generated code to a buffer and, when given, to an echo sink (usually stdout).
    one instance per parse; it owns the node ids of that parse.
    """

    def __init__(self, echo: Optional[Callable[[str], None]] = None):
        self._buffer: List[str] = []
        self._echo = echo
        self._nodes = NodeFactory()

    def output(self, msg: str):
        if self._echo is not None:
            self._echo(msg)
        self._buffer.append(msg)

    @property
    def code(self) -> str:
        return "".join(self._buffer)

    def build_node(self, name: str) -> TreeNode:
        return self._nodes.build(name)

    # ---------- header / footer ----------
    def write_header(self, label: str = config.ROOT_LABEL) -> TreeNode:
        root = self.build_node(label)
        self.output(
            "digraph ParseTree {\n"
            f'\t"{_escape(root)}" [label="{_escape(root.name)}", shape=diamond];\n'
        )
        return root

    def write_footer(self):
        self.output("}\n")

    # ---------- edges ----------
    def add_non_terminal(self, parent: TreeNode, name: str) -> TreeNode:
        """box a new non-terminal (or token-kind) node under parent and return it."""
        node = self.build_node(name)
        self.output(
            f'\t"{_escape(parent)}" -> {{"{_escape(node)}" [label="{_escape(name)}", shape=rect]}};\n'
        )
        return node

    def add_terminal(self, parent: TreeNode, lexeme: str) -> TreeNode:
        node = self.build_node(lexeme)
        self.output(
            f'\t"{_escape(parent)}" -> {{"{_escape(node)}" [label="{_escape(lexeme)}", shape=oval]}};\n'
        )
        return node

    def add_empty(self, parent: TreeNode) -> TreeNode:
        node = self.build_node(config.EMPTY_LABEL)
        self.output(f'\t"{_escape(parent)}" -> {{"{_escape(node)}" [label="&epsilon;", shape=none]}};\n')
        return node

    def close_with_error(self, parent: TreeNode, error: ParseError):
        """write the diagnostic edge and close the document."""
        self.output(f'\t"{_escape(parent)}" -> {{"{_escape(error.message)}"}};\n}}\n')
        logger.debug("closed graph after syntax error under %s", parent)

    def syntax_error(self, parent: TreeNode, error: ParseError) -> NoReturn:
        self.close_with_error(parent, error)
        raise error
