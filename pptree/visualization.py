"""
Printing and Graphviz export.
"""

from .core.tree import PPTree


def print_tree(tree: PPTree, max_symbols: int = 5):
    """Print each address with its most likely symbols."""
    print(f"\n{'='*60}")
    print(f"PPT: {len(tree)} node(s), min threshold {tree.min_threshold}")
    for address in tree.addresses():
        vector = tree.nodes[address]
        top = sorted(vector.weights.items(), key=lambda kv: -kv[1])[:max_symbols]
        listing = ", ".join(f"{name}={weight:.3f}" for name, weight in top)
        const = f"  R={vector.constant:.3f}" if vector.constant is not None else ""
        print(f"  {address:>6}: {listing}{const}")
    print(f"{'='*60}")


def print_samples(samples: list, hashes: dict = None):
    """Print sampled individuals, with their hash when one is given."""
    print(f"\n{'='*60}")
    print(f"Samples ({len(samples)}):")
    print(f"{'='*60}")
    for i, individual in enumerate(samples):
        tree = individual.tree
        text = tree.to_sexpr() if tree is not None else "(empty)"
        suffix = f"  [hash {hashes[i]}]" if hashes and i in hashes else ""
        print(f"  {i+1}. {text}{suffix}")


def export_dot(tree: PPTree, path="pptree.dot", max_arity: int = 2):
    """Write the PPT as a DOT file for Graphviz."""
    with open(path, "w") as f:
        f.write(tree.to_dot(max_arity))
        f.write("\n")
    print(f"Graph exported to {path}")
