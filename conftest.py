import sys
from pathlib import Path

import pytest

# allow running the suite from a source checkout without installing
_SRC = Path(__file__).resolve().parent / 'src'
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


@pytest.fixture
def manager():
    """Seeded manager, torn down after the test."""
    from fishery.ecosystem.integration import SimulationManager

    m = SimulationManager(seed=2024)
    yield m
    m.destroy_simulation(-1)
