"""
derivation tree nodes.

a node is only an identity plus a label; parent/child links live in the emitted edges,
nothing keeps an addressable tree around.
"""

import itertools
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class TreeNode:
    name: str
    node_id: int

    def __str__(self) -> str:
        return f"{self.name}-{self.node_id}"


class NodeFactory:
    """hands out node ids for one parse session, starting at 0."""

    def __init__(self):
        self._ids: Iterator[int] = itertools.count()

    def build(self, name: str) -> TreeNode:
        return TreeNode(name, next(self._ids))
