"""
Configuration for pytest to set up the import path and shared fixtures.
"""

import sys
import random
from pathlib import Path
import pytest


# Add the repository root to the Python path so lazyseq imports without installing
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

# Import after path setup
from lazyseq import clear_performance_metrics


@pytest.fixture
def numbers():
    """The integer sample used across the combinator tests."""
    return [1, 2, 3, 7, 8, 9]


@pytest.fixture
def seeded_rng():
    """A deterministic random generator for shuffle tests."""
    return random.Random(1234)


@pytest.fixture
def call_counter():
    """Wrap a function so the number of calls can be inspected afterwards."""
    class Counter:
        def __init__(self):
            self.calls = 0

        def wrap(self, fn):
            def wrapped(*args):
                self.calls += 1
                return fn(*args)
            return wrapped

    return Counter()


@pytest.fixture
def clean_metrics():
    """Reset the global performance metrics around a test."""
    clear_performance_metrics()
    yield
    clear_performance_metrics()
