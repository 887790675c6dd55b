"""Shared fixtures for fpgraph tests."""
import pytest

from fpgraph.graph import Graph


@pytest.fixture
def triangle() -> Graph:
    """Three nodes joined both ways in a cycle."""
    return Graph.from_dict({
        "1": ["2", "3"],
        "2": ["1", "3"],
        "3": ["1", "2"],
    })


@pytest.fixture
def path() -> Graph:
    """1 -> 2 -> 3, directed."""
    return Graph.from_dict({"1": ["2"], "2": ["3"], "3": []})
