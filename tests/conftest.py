"""Shared fixtures for the design tests."""
from pathlib import Path

import pytest

from rcdesign.models.footing import CalculatedFooting


@pytest.fixture(scope="session")
def sample_input_path() -> Path:
    return Path(__file__).parent.parent / "config" / "sample_input.yaml"


@pytest.fixture
def make_footing():
    """Factory for a sized footing with the given plan size and loads."""
    def _make(name="F1", dimension=2.0, utilization=80.0, dl_sdl=50.0, ll=10.0):
        return CalculatedFooting(
            unique_name=name,
            dl_sdl=dl_sdl,
            ll=ll,
            total_load=dl_sdl + ll,
            required_area=dimension * dimension,
            dimension=dimension,
            utilization_ratio=utilization,
        )
    return _make
