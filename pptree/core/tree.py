"""
The Probabilistic Prototype Tree (PPT) of PIPE.

R.P. Salustowicz, J. Schmidhuber, "Probabilistic incremental program
evolution", Evolutionary Computation 5(2), 123-141 (1997).

A PPT is a map from tree address to ProbabilityVector. "Initially, the PPT
contains the root node": every other address is created the first time
anything touches it, including a plain read. A created address is never
removed.

The tree does not learn by itself. It stores, scores and samples; the
learner only initializes fresh vectors, and any update is the caller
writing through set_probability_of / set_constant.

Not thread safe: reads can create nodes.
"""

import json
from typing import Optional

from .address import ROOT, MAX_CHILDREN, child_address, depth_of
from .vector import ERC, ProbabilityVector
from ..symbols.adapter import SymbolAdapter

MAX_DEPTH = 17


class PPTree:
    """
    Args:
        learner:       initializes each new vector; required.
        terminals:     terminal names; may be empty but not None.
        functions:     function names; may be empty but not None.
        min_threshold: read-side probability floor in [0, 1].
        adapter:       SymbolAdapter used to build and index program trees.
                       Default treats every function as binary.
    """

    def __init__(self, learner, terminals, functions, min_threshold: float = 0.0,
                 adapter: Optional[SymbolAdapter] = None):
        if learner is None:
            raise ValueError("Learner cannot be None.")
        if min_threshold < 0 or min_threshold > 1:
            raise ValueError(
                "Minimum probability threshold cannot be less than zero or "
                f"greater than 1: {min_threshold}"
            )
        if terminals is None or functions is None:
            raise ValueError("Function set or terminal set cannot be None.")

        self.learner = learner
        self.terminals = tuple(terminals)
        self.functions = tuple(functions)
        self.min_threshold = min_threshold
        if adapter is None:
            adapter = SymbolAdapter.binary(self.functions, self.terminals)
        self.adapter = adapter
        self.nodes = {}

        # The constant marker is always in the alphabet, so no vector is empty.
        self.get_or_create(ROOT)

    def _new_vector(self) -> ProbabilityVector:
        return ProbabilityVector(self.terminals, self.functions,
                                 self.min_threshold, self.adapter.erc_symbol)

    def get_or_create(self, address: str) -> ProbabilityVector:
        """
        The vector at `address`. A missing address gets a new vector,
        initialized once by the learner.
        """
        if not address:
            raise ValueError("Node address cannot be None or empty")
        vector = self.nodes.get(address)
        if vector is None:
            vector = self._new_vector()
            self.learner.initialize(vector)
            self.nodes[address] = vector
        return vector

    def probability_of(self, address: str, symbol: str) -> float:
        """Raw stored weight of `symbol` at `address`; may grow the tree."""
        if not symbol:
            raise ValueError("GP terminal/function name cannot be None or empty")
        return self.get_or_create(address).probability_of(symbol)

    get_probability_of = probability_of

    def set_probability_of(self, address: str, symbol: str, value: float):
        if not address:
            raise ValueError("Node address cannot be None or empty")
        if not symbol:
            raise ValueError("GP terminal/function name cannot be None or empty")
        if value < 0 or value > 1:
            raise ValueError(f"Probability value should be in the range [0, 1]: {value}")
        self.get_or_create(address).set_probability_of(symbol, value)

    def set_constant(self, address: str, value: Optional[float]):
        self.get_or_create(address).set_constant(value)

    def get_constant(self, address: str) -> Optional[float]:
        return self.get_or_create(address).get_constant()

    def probability_of_individual(self, individual, tree_index: int = 0,
                                  consider_threshold: bool = True) -> float:
        """
        Probability that this PPT generates tree `tree_index` of `individual`:
        the product over its addresses of the weight of the symbol found
        there, floored at min_threshold when `consider_threshold` is set.

        A symbol outside the alphabet fails the whole evaluation.
        """
        if individual is None or not individual.trees:
            raise ValueError("The given individual is None or does not contain any GP trees.")
        if tree_index < 0 or tree_index >= len(individual.trees):
            raise ValueError(f"Tree index is invalid: {tree_index}")

        index = self.adapter.index_by_address(individual.trees[tree_index])
        result = 1.0
        for address, node in index.items():
            vector = self.get_or_create(address)
            symbol = self.adapter.symbol_of(node)
            if consider_threshold:
                result *= vector.thresholded(symbol)
            else:
                result *= vector.probability_of(symbol)
        return result

    def sample_individual(self, rng, grow: bool = False, max_depth: int = MAX_DEPTH):
        """
        Sample a program tree. Returns its root Node, or None when the root
        vector is degenerate (all zeros).

        Child addresses the tree has never seen fall back to the constant
        marker. With `grow=True` they are created on demand instead.
        Nodes at `max_depth` (root is depth 1) are always the constant
        marker, so the tree is never deeper than that.
        """
        if rng is None:
            raise ValueError("Random generator cannot be None")
        if max_depth < 2:
            raise ValueError(f"Maximum depth must be at least 2: {max_depth}")

        name = self.nodes[ROOT].sample(rng)
        if name is None:
            return None
        root = self._materialize(ROOT, name, rng)
        self._add_children(root, ROOT, rng, grow, max_depth)
        return root

    def _materialize(self, address, name, rng):
        node = self.adapter.create_node(name, rng.random())
        if name == self.adapter.erc_symbol:
            vector = self.nodes.get(address)
            if vector is not None and vector.constant is not None:
                node.value = vector.constant
        return node

    def _add_children(self, parent, parent_address, rng, grow, max_depth):
        for i in range(parent.arity):
            address = child_address(parent_address, i)
            name = None
            if depth_of(address) + 1 < max_depth:
                vector = self.get_or_create(address) if grow else self.nodes.get(address)
                name = vector.sample(rng) if vector is not None else None
            if name is None:
                name = self.adapter.erc_symbol
            parent.set_child(i, self._materialize(address, name, rng))
            self._add_children(parent.children[i], address, rng, grow, max_depth)

    def addresses(self) -> list:
        return sorted(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, address):
        return address in self.nodes

    def to_string(self) -> str:
        return "".join(f"({address}, {self.nodes[address]})\n\n"
                       for address in self.addresses())

    def __str__(self):
        return self.to_string()

    def to_dot(self, max_arity: int = 2) -> str:
        """Graphviz description: one record per address, edges to children."""
        lines = ["digraph D {"]
        for address in self.addresses():
            base = "" if address == ROOT else address
            label = self.nodes[address].simplified().replace('"', '\\"')
            lines.append(f'n{base} [shape=record label="{label}"];')
            for i in range(min(max_arity, MAX_CHILDREN)):
                child = child_address(address, i)
                if child in self.nodes:
                    lines.append(f"n{base}->n{child};")
        lines.append("}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "terminals": list(self.terminals),
            "functions": list(self.functions),
            "min_threshold": self.min_threshold,
            "erc_symbol": self.adapter.erc_symbol,
            "nodes": {address: self.nodes[address].to_dict()
                      for address in self.addresses()},
        }

    @classmethod
    def from_dict(cls, d, learner, adapter: Optional[SymbolAdapter] = None):
        """Rebuild a tree. Stored vectors are restored as-is, not re-initialized."""
        if adapter is None:
            adapter = SymbolAdapter.binary(d["functions"], d["terminals"],
                                           erc_symbol=d.get("erc_symbol", ERC))
        tree = cls(learner, d["terminals"], d["functions"], d["min_threshold"], adapter)
        tree.nodes = {address: ProbabilityVector.from_dict(v)
                      for address, v in d["nodes"].items()}
        if ROOT not in tree.nodes:
            tree.get_or_create(ROOT)
        return tree

    def save(self, path="pptree.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path, learner, adapter: Optional[SymbolAdapter] = None):
        with open(path) as f:
            return cls.from_dict(json.load(f), learner, adapter)
