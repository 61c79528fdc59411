import pytest
from fastapi.testclient import TestClient

from iptv_catalog.config import CustomSettings
from iptv_catalog.database import close_db, init_db
from iptv_catalog.dependencies import get_service_locator, reset_service_locator
from iptv_catalog.main import app
from iptv_catalog.services import CatalogStore, CatalogSynchronizer, MemoryCatalogStore, SqlCatalogStore


SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="CNNInternational.us" tvg-country="US" tvg-logo="https://logo.example/cnn.png" group-title="News",CNN International
https://streams.example/cnn.m3u8
#EXTINF:-1 tvg-id="1TV.af@SD" tvg-logo="https://logo.example/1tv.png",1TV
https://streams.example/1tv.m3u8
#EXTINF:-1 tvg-id="ESPN.xx",ESPN HD
https://streams.example/espn.m3u8
#EXTINF:-1 tvg-id="Local5",Local Channel 5
https://streams.example/local5.m3u8
#EXTINF:-1 tvg-country="DE" group-title="General",Das Erste
https://streams.example/daserste.m3u8
"""


class FakeFetcher:
    """Stands in for fetch_playlist; returns canned text or raises"""

    def __init__(self, content: str = SAMPLE_PLAYLIST, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[tuple[str, float]] = []

    async def __call__(self, source: str, timeout: float) -> str:
        self.calls.append((source, timeout))
        if self.error is not None:
            raise self.error
        return self.content


def make_settings(**overrides) -> CustomSettings:
    values = {
        "playlist_source": "https://playlists.example/index.m3u",
        "catalog_backend": "memory",
        "database_path": ":memory:",
        "playlist_parse_timeout_sec": 0,
    }
    values.update(overrides)
    return CustomSettings(**values)


def build_playlist(count: int) -> str:
    lines = ["#EXTM3U"]
    for index in range(count):
        lines.append(f'#EXTINF:-1 tvg-id="Channel{index}.us",Channel {index}')
        lines.append(f"https://streams.example/{index}.m3u8")
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_playlist() -> str:
    return SAMPLE_PLAYLIST


@pytest.fixture
def memory_store() -> MemoryCatalogStore:
    return MemoryCatalogStore()


@pytest.fixture
async def sql_store():
    session_factory = await init_db(":memory:")
    yield SqlCatalogStore(session_factory, shared_connection=True)
    await close_db()


@pytest.fixture(params=["memory", "sqlite"])
async def catalog_store(request):
    """Runs a test against both store backends"""
    if request.param == "memory":
        yield MemoryCatalogStore()
        return
    session_factory = await init_db(":memory:")
    yield SqlCatalogStore(session_factory, shared_connection=True)
    await close_db()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def synchronizer(memory_store, fake_fetcher) -> CatalogSynchronizer:
    return CatalogSynchronizer(memory_store, make_settings(), fetcher=fake_fetcher)


@pytest.fixture
def client(memory_store, synchronizer):
    """API client wired to an isolated in-memory catalog (lifespan not run)"""
    reset_service_locator()
    locator = get_service_locator()
    locator.register_singleton(CatalogStore, memory_store)
    locator.register_singleton(CatalogSynchronizer, synchronizer)
    yield TestClient(app)
    reset_service_locator()
