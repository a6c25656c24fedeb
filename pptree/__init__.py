"""
pptree: Probabilistic Prototype Trees for genetic-programming hyper-heuristics.

A PPT (from PIPE, Salustowicz & Schmidhuber 1997) keeps one probability
distribution over the program alphabet per tree position. It can score an
existing program and sample new ones, and grows as positions are touched.

Usage:
    python -m pptree --samples 10
    python -m pptree --target "(+ SC (* CFH 0.5))" --adapt-steps 20
    python -m pptree --grow --dot pptree.dot --save pptree.json
"""

from .core.address import ROOT, child_address, parent_address, path_of, address_of
from .core.vector import ERC, UnknownSymbolError, ProbabilityVector
from .core.learner import Learner, UniformLearner, PointMassLearner, PipeLearner
from .core.tree import PPTree
from .symbols.node import Node, Individual, parse_tree
from .symbols.adapter import SymbolAdapter
from .symbols.ucarp import UCARP_TERMINALS, UCARP_FUNCTIONS, make_ucarp_adapter
from .hashing import VectorialHashCalculator
from .simplification import (
    Simplifier, SimplificationPass, FoldConstants, CollapseIdenticalOperands,
)

__all__ = [
    "ROOT", "child_address", "parent_address", "path_of", "address_of",
    "ERC", "UnknownSymbolError", "ProbabilityVector",
    "Learner", "UniformLearner", "PointMassLearner", "PipeLearner",
    "PPTree",
    "Node", "Individual", "parse_tree",
    "SymbolAdapter",
    "UCARP_TERMINALS", "UCARP_FUNCTIONS", "make_ucarp_adapter",
    "VectorialHashCalculator",
    "Simplifier", "SimplificationPass", "FoldConstants", "CollapseIdenticalOperands",
]
