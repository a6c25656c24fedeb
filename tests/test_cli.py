"""
Tests for printing, Graphviz export and the command line entry point.
"""

import json
import random
import sys

from pptree.__main__ import main, adapt_towards, sample_population
from pptree.core.learner import PipeLearner, UniformLearner
from pptree.core.tree import PPTree
from pptree.simplification import Simplifier, FoldConstants
from pptree.symbols.node import Individual, parse_tree
from pptree.symbols.ucarp import UCARP_TERMINALS, UCARP_FUNCTIONS, make_ucarp_adapter
from pptree.visualization import print_tree, print_samples, export_dot


def make_tree(learner=None):
    return PPTree(learner or PipeLearner(), UCARP_TERMINALS, UCARP_FUNCTIONS,
                  0.01, make_ucarp_adapter())


class TestVisualization:
    def test_print_tree_lists_addresses(self, capsys):
        tree = make_tree()
        tree.get_or_create("0")
        print_tree(tree)
        out = capsys.readouterr().out
        assert "2 node(s)" in out
        assert "-1:" in out
        assert "0:" in out

    def test_print_samples_handles_empty(self, capsys):
        adapter = make_ucarp_adapter()
        print_samples([Individual([]), Individual([parse_tree("(+ SC RQ)", adapter)])],
                      {1: 123})
        out = capsys.readouterr().out
        assert "(empty)" in out
        assert "(+ SC RQ)" in out
        assert "[hash 123]" in out

    def test_export_dot(self, tmp_path, capsys):
        tree = make_tree()
        tree.get_or_create("1")
        path = tmp_path / "ppt.dot"
        export_dot(tree, str(path))
        text = path.read_text()
        assert text.startswith("digraph D {")
        assert "n->n1;" in text


class TestHelpers:
    def test_adapt_towards_raises_probability(self):
        learner = PipeLearner(learning_rate=0.3)
        tree = make_tree(learner)
        target = Individual([parse_tree("(+ SC CFH)", tree.adapter)])
        before = tree.probability_of_individual(target, consider_threshold=False)
        adapt_towards(tree, learner, target, 5, verbose=False)
        after = tree.probability_of_individual(target, consider_threshold=False)
        assert after > before

    def test_sample_population_size(self):
        tree = make_tree(UniformLearner())
        samples = sample_population(tree, random.Random(0), 7,
                                    simplifier=Simplifier([FoldConstants()]),
                                    verbose=False)
        assert len(samples) == 7
        assert all(s.tree.is_complete() for s in samples)


class TestMain:
    def test_runs_quietly(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["pptree", "--samples", "4", "--quiet", "--seed", "3"])
        main()
        out = capsys.readouterr().out
        assert "Samples (4)" in out
        assert "Distinct programs by hash" in out

    def test_target_save_and_dot(self, monkeypatch, capsys, tmp_path):
        save = tmp_path / "tree.json"
        dot = tmp_path / "tree.dot"
        monkeypatch.setattr(sys, "argv", [
            "pptree", "--target", "(+ SC (* CFH 0.5))", "--adapt-steps", "3",
            "--samples", "2", "--save", str(save), "--dot", str(dot),
        ])
        main()
        out = capsys.readouterr().out
        assert "Target: (+ SC (* CFH 0.5))" in out
        assert "--- Step 3:" in out
        data = json.loads(save.read_text())
        assert {"-1", "0", "1", "10", "11"} <= set(data["nodes"])
        assert data["nodes"]["11"]["constant"] == 0.5
        assert dot.read_text().startswith("digraph D {")

    def test_load(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "tree.json"
        tree = make_tree()
        tree.get_or_create("0")
        tree.save(str(path))
        monkeypatch.setattr(sys, "argv", ["pptree", "--load", str(path), "--samples", "1"])
        main()
        assert "Loaded tree from" in capsys.readouterr().out

    def test_grow_with_function_only_learner_terminates(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "pptree", "--grow", "--terminal-prob", "0", "--max-depth", "5",
            "--samples", "2", "--quiet",
        ])
        main()
        out = capsys.readouterr().out
        assert "Samples (2)" in out
