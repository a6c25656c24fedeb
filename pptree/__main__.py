"""
CLI entry point. Run as: python -m pptree [options]

Builds a PPT over the UCARP routing-policy alphabet, optionally pulls it
towards a target program, then samples, simplifies and hashes programs.
"""

import argparse
import random

from .core.learner import PipeLearner
from .core.tree import PPTree, MAX_DEPTH
from .hashing import VectorialHashCalculator
from .simplification import Simplifier, FoldConstants, CollapseIdenticalOperands
from .symbols.node import Individual, parse_tree
from .symbols.ucarp import UCARP_TERMINALS, UCARP_FUNCTIONS, make_ucarp_adapter
from .visualization import print_tree, print_samples, export_dot


def adapt_towards(tree, learner, target, steps, verbose=True):
    """Run `steps` caller-driven learning updates towards `target`."""
    for step in range(steps):
        learner.adapt(tree, target)
        if verbose:
            p = tree.probability_of_individual(target, consider_threshold=False)
            print(f"--- Step {step + 1}: P(target) = {p:.6g} ---")
    return tree


def sample_population(tree, rng, count, grow=False, simplifier=None, verbose=True,
                      max_depth=MAX_DEPTH):
    samples = []
    for _ in range(count):
        root = tree.sample_individual(rng, grow=grow, max_depth=max_depth)
        individual = Individual([root] if root is not None else [])
        if simplifier is not None and individual.trees:
            if simplifier.simplify(individual) and verbose:
                print(f"  [simplified] {individual.tree.to_sexpr()}")
        samples.append(individual)
    return samples


def main():
    parser = argparse.ArgumentParser(description="Probabilistic Prototype Tree sampler")
    parser.add_argument("--seed",          type=int,   default=0,    help="Random seed")
    parser.add_argument("--samples",       type=int,   default=10,   help="Individuals to sample")
    parser.add_argument("--threshold",     type=float, default=0.01, help="Minimum probability threshold")
    parser.add_argument("--terminal-prob", type=float, default=0.8,  help="PIPE terminal probability P_T")
    parser.add_argument("--learning-rate", type=float, default=0.2,  help="PIPE learning rate")
    parser.add_argument("--target",        type=str,   default=None,
                        help='Program to learn towards, e.g. "(+ SC (* CFH 0.5))"')
    parser.add_argument("--adapt-steps",   type=int,   default=10,   help="Learning updates towards --target")
    parser.add_argument("--grow",          action="store_true",      help="Create missing nodes while sampling")
    parser.add_argument("--max-depth",     type=int,   default=MAX_DEPTH, help="Deepest sampled tree")
    parser.add_argument("--hash-order",    type=int,   default=10,   help="Length of hash vectors")
    parser.add_argument("--dot",           type=str,   default=None, help="Export DOT graph to file")
    parser.add_argument("--save",          type=str,   default=None, help="Save tree to file")
    parser.add_argument("--load",          type=str,   default=None, help="Load tree from file")
    parser.add_argument("--quiet",         action="store_true",      help="Less output")
    args = parser.parse_args()
    verbose = not args.quiet

    rng = random.Random(args.seed)
    adapter = make_ucarp_adapter()
    learner = PipeLearner(args.terminal_prob, args.learning_rate)

    # --- Load or build the tree ---
    if args.load:
        tree = PPTree.load(args.load, learner, adapter)
        print(f"Loaded tree from {args.load} ({len(tree)} nodes)")
    else:
        tree = PPTree(learner, UCARP_TERMINALS, UCARP_FUNCTIONS, args.threshold, adapter)

    try:
        if args.target:
            target = Individual([parse_tree(args.target, adapter)])
            print(f"Target: {target.tree.to_sexpr()}")
            adapt_towards(tree, learner, target, args.adapt_steps, verbose=verbose)

        simplifier = Simplifier().add(FoldConstants()).add(CollapseIdenticalOperands())
        samples = sample_population(tree, rng, args.samples, grow=args.grow,
                                    max_depth=args.max_depth,
                                    simplifier=simplifier, verbose=verbose)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return

    hasher = VectorialHashCalculator(UCARP_TERMINALS, hash_order=args.hash_order, seed=args.seed)
    hashes = {i: hasher.hash_of_tree(ind.tree) for i, ind in enumerate(samples) if ind.trees}

    if verbose:
        print_tree(tree)
    print_samples(samples, hashes)
    print(f"  Distinct programs by hash: {len(set(hashes.values()))}")

    if args.dot:
        export_dot(tree, args.dot)

    if args.save:
        tree.save(args.save)
        print(f"Tree saved to {args.save}")


if __name__ == "__main__":
    main()
