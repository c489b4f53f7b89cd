"""Pytest configuration and shared fixtures for epvotes tests."""

from pathlib import Path

import pytest
import pytest_asyncio

from epvotes.fetcher import Fetcher
from epvotes.models import Member
from epvotes.utils import pm
from tests.mocks.mock_api import SAMPLE_DOCUMENT_ID, MockApi
from tests.mocks.mock_plugins import MemoryCachePlugin

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_html():
    """Rendered RCV page with four vote blocks on two proposals."""
    return (FIXTURES_DIR / "rcv_sample.html").read_text(encoding="utf-8")


@pytest.fixture
def roster():
    """Roster matching the names printed in sample_html."""
    return [
        Member(id=101, full_name="Anna Doe"),
        Member(id=102, full_name="Hans Müller"),
        Member(id=103, full_name="Petr Škoda"),
        Member(id=104, full_name="Marie Dupont"),
        Member(id=105, full_name="John Smith"),
    ]


@pytest.fixture
def mock_api(sample_html):
    """Fake remote serving sample_html as SAMPLE_DOCUMENT_ID."""
    return MockApi(pages={SAMPLE_DOCUMENT_ID: sample_html})


@pytest_asyncio.fixture
async def fetcher(mock_api):
    """Fetcher whose requests are answered by mock_api."""
    async with Fetcher(client=mock_api.client(), retries=3) as fetcher:
        yield fetcher
        await fetcher.client.aclose()


@pytest.fixture
def memory_cache():
    """Register an in-memory cache plugin ahead of the file cache."""
    plugin = MemoryCachePlugin()
    pm.register(plugin)
    yield plugin
    pm.unregister(plugin)


@pytest.fixture
def tmp_cache_dir(tmp_path, monkeypatch):
    """Point the file cache at a temporary directory."""
    from epvotes.settings import settings

    cache_dir = tmp_path / "cache"
    monkeypatch.setattr(settings, "CACHE_DIR", str(cache_dir))
    return cache_dir
