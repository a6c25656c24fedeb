from .address import (
    ROOT, MAX_CHILDREN, is_root, child_address, parent_address,
    depth_of, path_of, address_of,
)
from .vector import ERC, UnknownSymbolError, ProbabilityVector, build_alphabet
from .learner import Learner, UniformLearner, PointMassLearner, PipeLearner
from .tree import PPTree

__all__ = [
    "ROOT", "MAX_CHILDREN", "is_root", "child_address", "parent_address",
    "depth_of", "path_of", "address_of",
    "ERC", "UnknownSymbolError", "ProbabilityVector", "build_alphabet",
    "Learner", "UniformLearner", "PointMassLearner", "PipeLearner",
    "PPTree",
]
