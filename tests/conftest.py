"""Pytest configuration and shared fixtures for boxtree tests."""

import pytest

from boxtree import LayoutConfig, TreeDiagramGenerator
from boxtree.graph import normalize_tree
from boxtree.layout import RowBuilder


@pytest.fixture
def single_leaf():
    """A tree with one node."""
    return [("A",)]


@pytest.fixture
def two_children():
    """A root with two leaf children."""
    return [("A", ("B",), ("C",))]


@pytest.fixture
def nested_tree():
    """A three level tree with uneven branching."""
    return [
        (
            "root",
            ("left", ("l1",), ("l2",), ("l3",)),
            ("mid",),
            ("right", ("r1",), ("r2", ("deep",))),
        )
    ]


@pytest.fixture
def forest():
    """Two trees side by side."""
    return [("A", ("C",)), ("B", ("D",))]


@pytest.fixture
def config():
    """Default layout configuration."""
    return LayoutConfig()


@pytest.fixture
def generator():
    """Default TreeDiagramGenerator instance."""
    return TreeDiagramGenerator()


@pytest.fixture
def two_children_rows(two_children, config):
    """Rows built for the two-children tree."""
    return RowBuilder(config).build(normalize_tree(two_children))
