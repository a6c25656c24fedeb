from .node import Node, Individual, parse_tree
from .adapter import SymbolAdapter
from .ucarp import UCARP_TERMINALS, UCARP_FUNCTIONS, make_ucarp_adapter

__all__ = [
    "Node", "Individual", "parse_tree",
    "SymbolAdapter",
    "UCARP_TERMINALS", "UCARP_FUNCTIONS", "make_ucarp_adapter",
]
