"""
Tests for the address scheme.

Core claims:
    - The root is "-1" and its children drop the sentinel
    - child_address and parent_address are inverses
    - A root-to-node path survives address_of -> path_of unchanged
    - Child indexes outside 0..9 are rejected, so addresses never collide
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pptree.core.address import (
    ROOT, is_root, child_address, parent_address,
    depth_of, path_of, address_of,
)


paths = st.lists(st.integers(min_value=0, max_value=9), max_size=8)


# ── Unit tests ───────────────────────────────────────────────────────────────

class TestChildAddress:
    def test_root_sentinel(self):
        assert ROOT == "-1"
        assert is_root("-1")

    def test_children_of_root_drop_sentinel(self):
        assert child_address(ROOT, 0) == "0"
        assert child_address(ROOT, 1) == "1"

    def test_grandchild_concatenates(self):
        assert child_address("0", 1) == "01"
        assert child_address("10", 0) == "100"

    def test_empty_parent_rejected(self):
        with pytest.raises(ValueError):
            child_address("", 0)

    def test_wide_index_rejected(self):
        with pytest.raises(ValueError):
            child_address(ROOT, 10)

    def test_negative_index_rejected(self):
        with pytest.raises(ValueError):
            child_address("0", -1)


class TestParentAddress:
    def test_parent_of_root_child_is_root(self):
        assert parent_address("0") == ROOT

    def test_parent_of_deep_address(self):
        assert parent_address("011") == "01"

    def test_root_has_no_parent(self):
        with pytest.raises(ValueError):
            parent_address(ROOT)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            parent_address("")


class TestDepthAndPath:
    def test_depths(self):
        assert depth_of(ROOT) == 0
        assert depth_of("1") == 1
        assert depth_of("101") == 3

    def test_path_of_root_is_empty(self):
        assert path_of(ROOT) == ()
        assert address_of(()) == ROOT

    def test_path_of_address(self):
        assert path_of("102") == (1, 0, 2)


# ── Property-based tests ─────────────────────────────────────────────────────

class TestAddressProperties:

    @given(paths)
    def test_path_round_trip(self, path):
        assert path_of(address_of(path)) == tuple(path)

    @given(paths, st.integers(min_value=0, max_value=9))
    def test_parent_inverts_child(self, path, index):
        address = address_of(path)
        assert parent_address(child_address(address, index)) == address

    @given(paths, paths)
    def test_distinct_paths_distinct_addresses(self, p1, p2):
        if p1 != p2:
            assert address_of(p1) != address_of(p2)
