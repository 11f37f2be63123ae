# tests/conftest.py

import pytest

from calhol.core.cache import ResolutionCache
from calhol.engines.resolver import HolidayEngine


@pytest.fixture
def cache():
    return ResolutionCache(max_years=64, max_points=256)


@pytest.fixture
def engine(cache):
    return HolidayEngine(cache=cache)
