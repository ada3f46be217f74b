# Test configuration
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from compute_demo.compute.aggregator import Aggregator
from compute_demo.compute.random_source import SequenceRandomSource


@pytest.fixture
def sequence_aggregator():
    """Aggregator replaying 0..9 so sums are known in advance."""
    aggregator = Aggregator(workers=4, random_source=SequenceRandomSource(range(10)))
    yield aggregator
    aggregator.close()
