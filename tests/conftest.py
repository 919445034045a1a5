"""Pytest configuration and shared fixtures for sankeylayout tests."""

import pytest

from sankeylayout import SankeyLayout


@pytest.fixture
def chain_data():
    """Linear A -> B -> C flow of 10 units."""
    return {
        "nodes": [{"name": "A"}, {"name": "B"}, {"name": "C"}],
        "links": [
            {"source": 0, "target": 1, "value": 10},
            {"source": 1, "target": 2, "value": 10},
        ],
    }


@pytest.fixture
def merge_data():
    """Two sources of 5 and 15 units flowing into one target."""
    return {
        "nodes": [{"name": "S1"}, {"name": "S2"}, {"name": "T"}],
        "links": [
            {"source": 0, "target": 2, "value": 5},
            {"source": 1, "target": 2, "value": 15},
        ],
    }


@pytest.fixture
def energy_data():
    """Three-column energy flow with merges, splits and a skipped column."""
    names = [
        "Coal",
        "Gas",
        "Solar",
        "Electricity",
        "Heat",
        "Homes",
        "Industry",
        "Losses",
    ]
    flows = [
        (0, 3, 30),
        (1, 3, 20),
        (1, 4, 15),
        (2, 3, 10),
        (3, 5, 25),
        (3, 6, 20),
        (3, 7, 15),
        (4, 5, 10),
        (4, 7, 5),
        (2, 7, 2),
    ]
    return {
        "nodes": [{"name": name} for name in names],
        "links": [
            {"source": s, "target": t, "value": v} for s, t, v in flows
        ],
    }


@pytest.fixture
def layout_engine():
    """Default SankeyLayout on a 300x100 area."""
    return SankeyLayout(width=300, height=100)


@pytest.fixture
def flow_text():
    """Flow text input."""
    return """
    # household budget
    Salary -> Budget : 3000
    Budget -> Rent : 1200
    Budget -> Food : 600
    Budget -> Savings : 1200
    """
