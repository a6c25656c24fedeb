"""
Program trees as plain node objects.

A Node has a symbol name, a fixed number of child slots, and for constants
a numeric value. Children are wired both ways: child.parent is the node
that holds it and child.argposition is its slot index.

Text form is an s-expression:
    SC                      a single terminal
    0.25                    a constant
    (+ SC (* CFH 0.5))      functions with their arguments
"""

from dataclasses import dataclass, field
from typing import Optional


class Node:
    """A node of a sampled or parsed program tree."""

    def __init__(self, name: str, arity: int = 0, value: Optional[float] = None):
        self.name = name
        self.value = value
        self.children = [None] * arity
        self.parent = None
        self.argposition = 0

    @property
    def arity(self) -> int:
        return len(self.children)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def set_child(self, index: int, child: "Node"):
        self.children[index] = child
        child.parent = self
        child.argposition = index

    def iter_nodes(self):
        """Pre-order walk. Empty slots are skipped."""
        yield self
        for child in self.children:
            if child is not None:
                yield from child.iter_nodes()

    def size(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def depth(self) -> int:
        filled = [c for c in self.children if c is not None]
        if not filled:
            return 1
        return 1 + max(c.depth() for c in filled)

    def is_complete(self) -> bool:
        """Every slot in the tree holds a node."""
        return all(c is not None for n in self.iter_nodes() for c in n.children)

    def to_sexpr(self) -> str:
        if self.is_leaf:
            return str(self)
        args = " ".join("?" if c is None else c.to_sexpr() for c in self.children)
        return f"({self.name} {args})"

    def copy(self) -> "Node":
        clone = Node(self.name, self.arity, self.value)
        for i, child in enumerate(self.children):
            if child is not None:
                clone.set_child(i, child.copy())
        return clone

    def __eq__(self, other):
        return (isinstance(other, Node) and
                self.name == other.name and
                self.value == other.value and
                self.children == other.children)

    def __hash__(self):
        return hash(self.to_sexpr())

    def __str__(self):
        if self.value is not None:
            return repr(float(self.value))
        return self.name

    def __repr__(self):
        return f"Node({self.to_sexpr()})"


@dataclass
class Individual:
    """One candidate program. Multi-tree individuals keep one root per tree."""
    trees: list = field(default_factory=list)
    fitness: Optional[float] = None

    @property
    def tree(self) -> Optional[Node]:
        return self.trees[0] if self.trees else None

    def __repr__(self):
        return f"Individual({', '.join(t.to_sexpr() for t in self.trees)})"


def _tokenize(text: str) -> list:
    return text.replace("(", " ( ").replace(")", " ) ").split()


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def parse_tree(text: str, adapter) -> Node:
    """
    Parse an s-expression into a Node tree using `adapter` for arities.

    Numeric atoms become constant-marker nodes carrying that value.
    """
    tokens = _tokenize(text)
    if not tokens:
        raise ValueError("Cannot parse an empty tree")
    pos = 0

    def read():
        nonlocal pos
        if pos >= len(tokens):
            raise ValueError(f"Unexpected end of tree: {text!r}")
        token = tokens[pos]
        pos += 1
        if token == ")":
            raise ValueError(f"Unexpected ')' in {text!r}")
        if token != "(":
            if _is_number(token):
                node = adapter.create_node(adapter.erc_symbol, 0.0)
                node.value = float(token)
                return node
            node = adapter.create_node(token, 0.0)
            if node.arity:
                raise ValueError(f"{token} needs {node.arity} arguments")
            return node
        if pos >= len(tokens):
            raise ValueError(f"Unexpected end of tree: {text!r}")
        name = tokens[pos]
        pos += 1
        node = adapter.create_node(name, 0.0)
        args = []
        while pos < len(tokens) and tokens[pos] != ")":
            args.append(read())
        if pos >= len(tokens):
            raise ValueError(f"Missing ')' in {text!r}")
        pos += 1
        if len(args) != node.arity:
            raise ValueError(
                f"{name} expects {node.arity} arguments, got {len(args)}"
            )
        for i, arg in enumerate(args):
            node.set_child(i, arg)
        return node

    root = read()
    if pos != len(tokens):
        raise ValueError(f"Trailing tokens after tree: {text!r}")
    return root
