"""Shared test fixtures for Towerforge."""

import random
import tempfile
from pathlib import Path

import pytest

from towerforge.core import TileCatalog, TileDefinition


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (skipped by default, run with --run-slow)")


def pytest_addoption(parser):
    """Add --run-slow option to pytest."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="Run slow tests (skipped by default)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is passed."""
    if config.getoption("--run-slow"):
        return

    skip_slow = pytest.mark.skip(reason="Slow test (use --run-slow to run)")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


class FirstChoiceRandom(random.Random):
    """Random source that always picks the first option."""

    def choice(self, seq):
        return seq[0]


class LastChoiceRandom(random.Random):
    """Random source that always picks the last option."""

    def choice(self, seq):
        return seq[-1]


class RecordingRandom(random.Random):
    """Seeded random source that remembers every sequence it chose from."""

    def __init__(self, seed=None):
        super().__init__(seed)
        self.draws: list[list] = []

    def choice(self, seq):
        self.draws.append(list(seq))
        return super().choice(seq)


@pytest.fixture
def first_choice_rng() -> FirstChoiceRandom:
    return FirstChoiceRandom()


@pytest.fixture
def last_choice_rng() -> LastChoiceRandom:
    return LastChoiceRandom()


@pytest.fixture
def recording_rng() -> RecordingRandom:
    return RecordingRandom(seed=7)


@pytest.fixture
def temp_data_dir() -> Path:
    """Create a temporary data directory for tests."""
    with tempfile.TemporaryDirectory(prefix="towerforge_test_") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def open_catalog() -> TileCatalog:
    """Two tiles with no sockets at all: one plain, one roof.

    Every tile fits next to every other, so generation never contradicts.
    """
    return TileCatalog([
        TileDefinition(id="plain"),
        TileDefinition(id="cap", is_roof_tile=True),
    ])


@pytest.fixture
def clashing_catalog() -> TileCatalog:
    """Two roof tiles whose inward seams never agree.

    On a 2x1x2 grid both tiles only survive seeding in the south-west
    corner; the other three cells are emptied by the boundary pass.
    """
    return TileCatalog([
        TileDefinition(id="red", east="red", north="red", is_roof_tile=True),
        TileDefinition(id="blue", east="blue", north="blue", is_roof_tile=True),
    ])


@pytest.fixture
def spur_catalog() -> TileCatalog:
    """A tile with a seam that nothing else accepts, plus an open tile.

    Picking the spur in the south-west corner of a 2x1x2 grid contradicts
    its east and north neighbors; picking the open tile does not.
    """
    return TileCatalog([
        TileDefinition(id="spur", east="pipe", north="pipe", is_roof_tile=True),
        TileDefinition(id="open", is_roof_tile=True),
    ])


@pytest.fixture
def column_catalog() -> TileCatalog:
    """Stackable tiles with horizontal seams, usable on any footprint size.

    Horizontal faces are all None, so boundaries never empty a cell, while
    the vertical sockets make layers constrain each other.
    """
    return TileCatalog([
        TileDefinition(id="base", top="shaft"),
        TileDefinition(id="shaft", top="shaft", bottom="shaft"),
        TileDefinition(id="shaft_cap", bottom="shaft", is_roof_tile=True),
        TileDefinition(id="lone_cap", is_roof_tile=True),
        TileDefinition(id="rubble"),
    ])
