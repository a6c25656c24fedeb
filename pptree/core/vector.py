"""
Probability vector: the distribution held at one address of a PPT.

Keys are fixed at construction (terminals, then functions, then the
constant marker if it is not already a terminal). Only the values change.

The minimum threshold is a read-side floor. It is stored here so the
evaluator can ask for it, but a stored weight is never clamped, so a value
written with set_probability_of always reads back exactly.
"""

from typing import Optional

ERC = "ERC"


class UnknownSymbolError(ValueError):
    """A symbol outside the alphabet a vector was built over."""


def build_alphabet(terminals, functions, erc_symbol: str = ERC) -> tuple:
    """Terminals, then functions, then the constant marker. No duplicates."""
    alphabet = []
    for name in list(terminals) + list(functions) + [erc_symbol]:
        if name not in alphabet:
            alphabet.append(name)
    return tuple(alphabet)


class ProbabilityVector:
    """Per-node distribution over terminals ∪ functions ∪ {ERC}."""

    def __init__(self, terminals, functions, min_threshold: float = 0.0,
                 erc_symbol: str = ERC):
        if terminals is None or functions is None:
            raise ValueError("Function set or terminal set cannot be None.")
        if min_threshold < 0 or min_threshold > 1:
            raise ValueError(
                f"Minimum probability threshold must be in [0, 1]: {min_threshold}"
            )
        self.terminals = tuple(terminals)
        self.functions = tuple(functions)
        self.erc_symbol = erc_symbol
        self.min_threshold = min_threshold
        self.weights = {name: 0.0 for name in
                        build_alphabet(self.terminals, self.functions, erc_symbol)}
        self.constant: Optional[float] = None

    @property
    def symbols(self) -> tuple:
        return tuple(self.weights)

    def _check_symbol(self, symbol: str):
        if not symbol:
            raise ValueError("GP terminal/function name cannot be None or empty")
        if symbol not in self.weights:
            raise UnknownSymbolError(f"Unknown GP terminal/function: {symbol!r}")

    def probability_of(self, symbol: str) -> float:
        """The stored weight of `symbol`, never floored."""
        self._check_symbol(symbol)
        return self.weights[symbol]

    def thresholded(self, symbol: str) -> float:
        """The weight of `symbol`, floored at min_threshold."""
        return max(self.probability_of(symbol), self.min_threshold)

    def set_probability_of(self, symbol: str, value: float):
        self._check_symbol(symbol)
        if value < 0 or value > 1:
            raise ValueError(f"Probability value should be in the range [0, 1]: {value}")
        self.weights[symbol] = value

    def get_min_threshold(self) -> float:
        return self.min_threshold

    def set_constant(self, value: Optional[float]):
        self.constant = value

    def get_constant(self) -> Optional[float]:
        return self.constant

    def total(self) -> float:
        return sum(self.weights.values())

    def sample(self, rng) -> Optional[str]:
        """
        Draw one symbol, treating the weights as an unnormalized categorical
        distribution. Uses exactly one rng.random() call, so the same rng
        state gives the same draw.

        Returns None when every weight is zero.
        """
        total = self.total()
        if total <= 0:
            return None
        target = rng.random() * total
        cumulative = 0.0
        last = None
        for name, weight in self.weights.items():
            if weight <= 0:
                continue
            cumulative += weight
            last = name
            if target < cumulative:
                return name
        # Float round-off can leave target == total.
        return last

    def to_dict(self) -> dict:
        return {
            "terminals": list(self.terminals),
            "functions": list(self.functions),
            "erc_symbol": self.erc_symbol,
            "min_threshold": self.min_threshold,
            "weights": dict(self.weights),
            "constant": self.constant,
        }

    @classmethod
    def from_dict(cls, d):
        vector = cls(d["terminals"], d["functions"], d["min_threshold"],
                     d.get("erc_symbol", ERC))
        for name, weight in d["weights"].items():
            vector.set_probability_of(name, weight)
        vector.constant = d.get("constant")
        return vector

    def simplified(self) -> str:
        """Non-zero weights only. Used for graph labels."""
        parts = [f"{name}: {weight:.3f}" for name, weight in self.weights.items()
                 if weight > 0]
        if self.constant is not None:
            parts.append(f"R: {self.constant:.3f}")
        return " | ".join(parts) if parts else "(empty)"

    def __str__(self):
        body = ", ".join(f"{name}: {weight}" for name, weight in self.weights.items())
        if self.constant is not None:
            body += f", R: {self.constant}"
        return "[" + body + "]"

    def __repr__(self):
        return f"ProbabilityVector({self.simplified()})"
