"""
Learning rules: how a fresh probability vector starts out, and how a
caller can nudge a tree towards an individual it liked.

The tree only ever calls `initialize`. Everything else is driven by the
caller and goes through the tree's public setters, so the tree stays a
passive store.
"""

from .vector import ProbabilityVector


class Learner:
    """Strategy interface consumed by PPTree."""

    def initialize(self, vector: ProbabilityVector):
        """Leave every probability of `vector` in [0, 1]."""
        raise NotImplementedError


class UniformLearner(Learner):
    """Every symbol equally likely."""

    def initialize(self, vector: ProbabilityVector):
        p = 1.0 / len(vector.symbols)
        for name in vector.symbols:
            vector.set_probability_of(name, p)


class PointMassLearner(Learner):
    """All mass on one symbol. Handy for pinning down what gets sampled."""

    def __init__(self, symbol: str):
        self.symbol = symbol

    def initialize(self, vector: ProbabilityVector):
        for name in vector.symbols:
            vector.set_probability_of(name, 0.0)
        vector.set_probability_of(self.symbol, 1.0)


class PipeLearner(Learner):
    """
    PIPE's initialization and adaptation rule (Salustowicz & Schmidhuber, 1997).

    Initialization gives terminals (constant marker included) a combined
    mass of `terminal_probability` and functions the rest:

        P(t) = P_T / |T|        P(f) = (1 - P_T) / |F|

    If one of the two sets is empty its share goes to the other.

    `adapt` raises the probability of each symbol the individual uses at
    its address:

        P(I) <- P(I) + rate * (1 - P(I))

    and rescales the other symbols so the vector still sums to one.
    """

    def __init__(self, terminal_probability: float = 0.8, learning_rate: float = 0.1):
        if terminal_probability < 0 or terminal_probability > 1:
            raise ValueError(
                f"Terminal probability must be in [0, 1]: {terminal_probability}"
            )
        if learning_rate < 0 or learning_rate > 1:
            raise ValueError(f"Learning rate must be in [0, 1]: {learning_rate}")
        self.terminal_probability = terminal_probability
        self.learning_rate = learning_rate

    def initialize(self, vector: ProbabilityVector):
        functions = [name for name in vector.symbols if name in vector.functions]
        terminals = [name for name in vector.symbols if name not in vector.functions]
        p_t = self.terminal_probability
        if not functions:
            p_t = 1.0
        elif not terminals:
            p_t = 0.0
        for name in terminals:
            vector.set_probability_of(name, p_t / len(terminals))
        for name in functions:
            vector.set_probability_of(name, (1.0 - p_t) / len(functions))

    def adapt(self, tree, individual, tree_index: int = 0, rate: float = None):
        """
        Move every address `individual` occupies towards the symbol it holds
        there. Numeric leaves also store their value as the address constant.
        """
        rate = self.learning_rate if rate is None else rate
        if not individual.trees:
            raise ValueError("The given individual does not contain any GP trees.")
        if tree_index < 0 or tree_index >= len(individual.trees):
            raise ValueError(f"Tree index is invalid: {tree_index}")

        index = tree.adapter.index_by_address(individual.trees[tree_index])
        # Resolve every symbol first: a foreign one must leave the tree untouched.
        symbols = {}
        for address, node in index.items():
            symbol = tree.adapter.symbol_of(node)
            tree.get_or_create(address).probability_of(symbol)
            symbols[address] = symbol

        for address, node in index.items():
            symbol = symbols[address]
            vector = tree.get_or_create(address)
            old = vector.probability_of(symbol)
            new = old + rate * (1.0 - old)

            rest = vector.total() - old
            scale = (1.0 - new) / rest if rest > 0 else 0.0
            for name in vector.symbols:
                if name == symbol:
                    continue
                p = vector.probability_of(name) * scale
                tree.set_probability_of(address, name, min(max(p, 0.0), 1.0))
            tree.set_probability_of(address, symbol, min(new, 1.0))

            if tree.adapter.is_constant(node) and node.value is not None:
                tree.set_constant(address, node.value)
