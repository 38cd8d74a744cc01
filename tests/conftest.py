import random
import sys
from pathlib import Path

import pytest

# Ensure the project root is importable without an install
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from orbit.model import Category, GraphModel, Tool  # noqa: E402


@pytest.fixture
def model():
    """Two categories: A due east of the center at 100, B due west at 200."""
    return GraphModel(
        categories=[
            Category(id="cat-a", label="Design", angle=0, radius=100),
            Category(id="cat-b", label="Video", angle=180, radius=200,
                     tools=[Tool(id="t-1", name="Premiere")]),
        ],
        rng=random.Random(7),
    )
