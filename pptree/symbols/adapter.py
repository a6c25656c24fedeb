"""
The boundary between a PPT and concrete program trees.

The PPT only knows symbol names. The adapter knows how many children each
symbol takes, how a constant gets its value, and how to walk a tree by
address. Swap it out to plug the PPT into another tree representation.
"""

from typing import Optional

from ..core.address import ROOT, child_address
from ..core.vector import ERC
from .node import Node, _is_number


class SymbolAdapter:
    """
    Builds Nodes from symbol names and indexes trees by address.

    Args:
        arities:    {symbol: number of children}. Symbols not listed are
                    leaves only if passed in `terminals`.
        terminals:  leaf symbols (arity 0).
        erc_symbol: name of the constant marker.
        erc_range:  (low, high); a constant's value is low + seed*(high-low).
    """

    def __init__(self, arities: Optional[dict] = None, terminals=(),
                 erc_symbol: str = ERC, erc_range: tuple = (0.0, 1.0)):
        self.arities = {name: 0 for name in terminals}
        self.arities.update(arities or {})
        self.arities.setdefault(erc_symbol, 0)
        self.erc_symbol = erc_symbol
        self.erc_range = erc_range

    @classmethod
    def binary(cls, functions, terminals=(), **kwargs) -> "SymbolAdapter":
        """All functions take two arguments, the common GPHH setup."""
        return cls({name: 2 for name in functions}, terminals, **kwargs)

    def arity_of(self, name: str) -> int:
        if name not in self.arities:
            raise ValueError(f"Unknown GP terminal/function: {name!r}")
        return self.arities[name]

    def create_node(self, name: str, seed: float) -> Node:
        """A fresh node for `name` with empty child slots."""
        if not name:
            raise ValueError("GP terminal/function name cannot be None or empty")
        node = Node(name, self.arity_of(name))
        if name == self.erc_symbol:
            low, high = self.erc_range
            node.value = low + seed * (high - low)
        return node

    def is_constant(self, node: Node) -> bool:
        return node.name == self.erc_symbol or _is_number(node.name)

    def symbol_of(self, node: Node) -> str:
        """The alphabet symbol a node counts as. Numbers count as the marker."""
        if self.is_constant(node):
            return self.erc_symbol
        return node.name

    def index_by_address(self, root: Node) -> dict:
        """{address: node} for every node reachable from `root`."""
        index = {}

        def walk(node, address):
            index[address] = node
            for i, child in enumerate(node.children):
                if child is not None:
                    walk(child, child_address(address, i))

        if root is not None:
            walk(root, ROOT)
        return index
