"""
Common test fixtures and configuration for sparsetensor tests.
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path for imports
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sparsetensor import make_tensor


@pytest.fixture
def matrix():
    """2×2 matrix [[1, 2], [3, 4]]."""
    return make_tensor([[1, 2], [3, 4]], [2, 2], 0)


@pytest.fixture
def wide_matrix():
    """2×3 matrix [[1, 2, 3], [4, 5, 6]]."""
    return make_tensor([[1, 2, 3], [4, 5, 6]], [2, 3], 0)


@pytest.fixture
def vector():
    """Dense length-4 vector."""
    return make_tensor([1, 2, 3, 4])


@pytest.fixture
def sparse_vector():
    """Length-4 vector with a single stored cell."""
    return make_tensor([0, 0, 5, 0], [4], 0)


@pytest.fixture
def order3_values():
    """Nested 2×3×4 list with some identity cells."""
    return [
        [[1, 0, 2, 0], [0, 0, 0, 0], [3, 4, 0, 5]],
        [[0, 6, 0, 0], [7, 0, 0, 8], [0, 0, 9, 0]],
    ]


@pytest.fixture
def order3(order3_values):
    """Sparse 2×3×4 tensor."""
    return make_tensor(order3_values, [2, 3, 4], 0)


@pytest.fixture
def order4():
    """Sparse 2×3×2×3 tensor with distinct stored values."""
    values = [
        [[[a * 100 + b * 10 + c * 3 + d if (a + b + c + d) % 3 else 0
           for d in range(3)] for c in range(2)] for b in range(3)]
        for a in range(2)
    ]
    return make_tensor(values, [2, 3, 2, 3], 0)


# Pytest configuration hooks
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )
    config.addinivalue_line(
        "markers", "property: mark test as checking an algebraic property"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test names."""
    for item in items:
        if any(keyword in item.nodeid for keyword in ["involution", "round_trip", "identity_law"]):
            item.add_marker(pytest.mark.property)

        if any(keyword in item.nodeid for keyword in ["large", "performance"]):
            item.add_marker(pytest.mark.slow)
