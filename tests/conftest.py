import sys
from pathlib import Path

import pytest

# Allow running the suite from a source checkout without installing.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from abhungarian.generators import textbook_costs  # noqa: E402


@pytest.fixture
def textbook():
    return textbook_costs()
