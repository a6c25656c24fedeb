"""
Vectorial algebraic hashing of program trees.

Each terminal gets a fixed random vector. A constant hashes to a vector
filled with its value. A function node combines its children's vectors
element-wise with its own arithmetic, so trees that compute the same
expression up to that arithmetic (e.g. (+ A B) and (+ B A)) hash alike.
Division is protected exactly as in FoldConstants (zero divisor gives 1.0),
so a tree and its simplified form hash alike.

The fingerprint is a blake2b digest of the vector, stable across processes.

Used to spot duplicate programs in a sampled population.
"""

import hashlib
from typing import Optional

import numpy as np

from .core.vector import ERC


def _protected_divide(a, b):
    with np.errstate(divide="ignore", invalid="ignore"):
        return np.where(b == 0, 1.0, np.divide(a, b))


OPERATORS = {
    "+": np.add,
    "-": np.subtract,
    "*": np.multiply,
    "/": _protected_divide,
    "min": np.minimum,
    "max": np.maximum,
}


class VectorialHashCalculator:
    """
    Args:
        terminals:   terminal names to assign vectors to. The constant
                     marker is skipped: its vector comes from the node value.
        hash_order:  length of every hash vector.
        seed:        seed for the numpy generator.
        max_retries: cap on redraws when a random integer was already used.
        bound:       integers are drawn from [-bound, bound).
        erc_symbol:  name of the constant marker.
    """

    def __init__(self, terminals, hash_order: int = 10, seed: Optional[int] = None,
                 max_retries: int = 1000, bound: int = 2 ** 31,
                 erc_symbol: str = ERC):
        if hash_order <= 0:
            raise ValueError(f"Hash order must be positive: {hash_order}")
        names = [t for t in terminals if t != erc_symbol]
        if len(names) * hash_order > 2 * bound:
            raise ValueError("Draw space too small for the requested vectors")

        self.hash_order = hash_order
        self.max_retries = max_retries
        self.bound = bound
        self.erc_symbol = erc_symbol
        self.rng = np.random.default_rng(seed)
        self.seen = set()
        self.vectors = {name: self._next_vector() for name in names}

    def _draw_unique(self) -> int:
        for _ in range(self.max_retries + 1):
            value = int(self.rng.integers(-self.bound, self.bound))
            if value not in self.seen:
                self.seen.add(value)
                return value
        raise RuntimeError(
            f"No unused random integer after {self.max_retries} retries"
        )

    def _next_vector(self) -> np.ndarray:
        return np.array([self._draw_unique() for _ in range(self.hash_order)],
                        dtype=float)

    def vector_of_terminal(self, node) -> np.ndarray:
        if node.value is not None:
            return np.full(self.hash_order, float(node.value))
        if node.name == self.erc_symbol:
            raise ValueError("Constant node without a value cannot be hashed")
        vector = self.vectors.get(node.name)
        if vector is None:
            raise ValueError(f"Received an unknown terminal to hash: {node.name}")
        return vector

    def vector_of_tree(self, root) -> np.ndarray:
        if root.is_leaf:
            return self.vector_of_terminal(root)
        op = OPERATORS.get(root.name)
        if op is None:
            raise ValueError(f"Received an unknown function to hash: {root.name}")
        if root.arity != 2:
            raise ValueError(f"{root.name} must have two children to hash, has {root.arity}")
        left = self.vector_of_tree(root.children[0])
        right = self.vector_of_tree(root.children[1])
        return op(left, right)

    def hash_of_tree(self, root) -> int:
        vector = self.vector_of_tree(root) + 0.0  # -0.0 -> 0.0
        vector = np.where(np.isnan(vector), np.nan, vector)
        digest = hashlib.blake2b(vector.astype("<f8").tobytes(), digest_size=8).digest()
        return int.from_bytes(digest, "big", signed=True)
