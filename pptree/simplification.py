"""
Simplification of sampled program trees.

A Simplifier owns an ordered list of passes and runs them one after the
other over an individual. Each pass can have an observer, called with the
individual right after that pass ran (whether or not it changed anything).

    simplifier = Simplifier().add(FoldConstants()).add(CollapseIdenticalOperands(), log)
    changed = simplifier.simplify(individual)
"""

from typing import Callable, Optional

from .core.vector import ERC
from .symbols.node import Node


def _replace(individual, tree_index: int, old: Node, new: Node):
    """Put `new` where `old` sits, in its parent or as the tree root."""
    parent = old.parent
    if parent is None:
        new.parent = None
        new.argposition = 0
        individual.trees[tree_index] = new
    else:
        parent.set_child(old.argposition, new)


def _is_constant(node: Node) -> bool:
    return node.is_leaf and node.value is not None


def apply_operator(name: str, a: float, b: float) -> Optional[float]:
    """Arithmetic of the standard function set. None for anything else."""
    if name == "+":
        return a + b
    if name == "-":
        return a - b
    if name == "*":
        return a * b
    if name == "/":
        # protected division
        return 1.0 if b == 0 else a / b
    if name == "min":
        return min(a, b)
    if name == "max":
        return max(a, b)
    return None


class SimplificationPass:
    """One rewrite over an individual. Returns True if anything changed."""

    def simplify(self, individual) -> bool:
        changed = False
        for i in range(len(individual.trees)):
            changed |= self.simplify_tree(individual, i)
        return changed

    def simplify_tree(self, individual, tree_index: int) -> bool:
        return False


class FoldConstants(SimplificationPass):
    """(+ 0.5 0.25) -> 0.75, applied bottom-up."""

    def __init__(self, erc_symbol: str = ERC):
        self.erc_symbol = erc_symbol

    def simplify_tree(self, individual, tree_index):
        root = individual.trees[tree_index]
        return self._fold(individual, tree_index, root)

    def _fold(self, individual, tree_index, node):
        changed = False
        for child in list(node.children):
            if child is not None:
                changed |= self._fold(individual, tree_index, child)
        if node.arity != 2 or not all(c is not None and _is_constant(c) for c in node.children):
            return changed
        value = apply_operator(node.name, node.children[0].value, node.children[1].value)
        if value is None:
            return changed
        _replace(individual, tree_index, node, Node(self.erc_symbol, 0, value))
        return True


class CollapseIdenticalOperands(SimplificationPass):
    """(min X X) -> X, (max X X) -> X, (- X X) -> 0."""

    def __init__(self, erc_symbol: str = ERC):
        self.erc_symbol = erc_symbol

    def simplify_tree(self, individual, tree_index):
        return self._collapse(individual, tree_index, individual.trees[tree_index])

    def _collapse(self, individual, tree_index, node):
        changed = False
        for child in list(node.children):
            if child is not None:
                changed |= self._collapse(individual, tree_index, child)
        if node.arity != 2 or node.children[0] is None:
            return changed
        left, right = node.children
        if left != right:
            return changed
        if node.name in ("min", "max"):
            _replace(individual, tree_index, node, left)
            return True
        if node.name == "-":
            _replace(individual, tree_index, node, Node(self.erc_symbol, 0, 0.0))
            return True
        return changed


class Simplifier:
    """Runs simplification passes in the order they were added."""

    def __init__(self, passes=()):
        self.passes = []
        for p in passes:
            self.add(p)

    def add(self, simplification_pass: SimplificationPass,
            on_simplified: Optional[Callable] = None) -> "Simplifier":
        """Append a pass. The same pass object may be added more than once."""
        self.passes.append((simplification_pass, on_simplified))
        return self

    def simplify(self, individual) -> bool:
        changed = False
        for simplification_pass, on_simplified in self.passes:
            changed |= simplification_pass.simplify(individual)
            if on_simplified is not None:
                on_simplified(individual)
        return changed

    def __len__(self):
        return len(self.passes)
