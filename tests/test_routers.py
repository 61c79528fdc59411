from iptv_catalog.dependencies import get_service_locator
from iptv_catalog.services import CatalogSynchronizer, PlaylistFetchError

from conftest import FakeFetcher, make_settings


def sync(client):
    response = client.post("/api/channels/sync")
    assert response.status_code == 200
    return response.json()


def test_root_and_health(client):
    root = client.get("/").json()
    health = client.get("/health").json()

    assert root["service"] == "IPTV Catalog Service"
    assert root["channels"] == 0
    assert health["status"] == "ok"
    assert health["sync_in_progress"] is False
    assert health["last_sync_status"] is None


def test_sync_endpoint_reports_count(client):
    body = sync(client)

    assert body["message"] == "Channels synchronized successfully"
    assert body["count"] == 5
    assert body["channelsParsed"] == 5
    assert "error" not in body
    assert client.get("/health").json()["last_sync_status"] == "success"


def test_sync_failure_returns_error_and_zero_count(client, memory_store):
    sync(client)
    failing = CatalogSynchronizer(
        memory_store,
        make_settings(),
        fetcher=FakeFetcher(error=PlaylistFetchError("Timed out fetching playlist")),
    )
    get_service_locator().register_singleton(CatalogSynchronizer, failing)

    response = client.post("/api/channels/sync")

    assert response.status_code == 500
    assert response.json() == {
        "status": "failed",
        "message": "Failed to sync channels",
        "count": 0,
        "error": "Timed out fetching playlist",
    }
    assert len(client.get("/api/channels").json()) == 5


def test_list_channels_uses_camel_case_and_pagination(client):
    sync(client)

    channels = client.get("/api/channels", params={"limit": 2, "offset": 1}).json()

    assert [c["name"] for c in channels] == ["1TV", "ESPN HD"]
    first = channels[0]
    assert first["streamUrl"] == "https://streams.example/1tv.m3u8"
    assert first["countryCode"] == "af"
    assert first["isOnline"] is True
    assert first["language"] == "en"


def test_list_channels_rejects_bad_pagination(client):
    assert client.get("/api/channels", params={"limit": 0}).status_code == 422
    assert client.get("/api/channels", params={"offset": -1}).status_code == 422


def test_search_requires_query(client):
    assert client.get("/api/channels/search").status_code == 400
    response = client.get("/api/channels/search", params={"q": "  "})
    assert response.status_code == 400
    assert response.json()["detail"] == "Search query is required"


def test_search(client):
    sync(client)

    names = [c["name"] for c in client.get("/api/channels/search", params={"q": "espn"}).json()]

    assert names == ["ESPN HD"]


def test_filter_by_country_and_category(client):
    sync(client)

    by_country = client.get("/api/channels/country/de").json()
    by_category = client.get("/api/channels/category/sports").json()

    assert [c["name"] for c in by_country] == ["Das Erste"]
    assert [c["name"] for c in by_category] == ["ESPN HD"]


def test_channel_by_id_and_not_found(client):
    sync(client)
    channel_id = client.get("/api/channels").json()[0]["id"]

    assert client.get(f"/api/channels/{channel_id}").json()["name"] == "CNN International"
    response = client.get("/api/channels/99999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Channel not found"


def test_stats_endpoints(client):
    sync(client)

    countries = client.get("/api/stats/countries").json()
    categories = client.get("/api/stats/categories").json()

    assert countries[0] == {"code": "xx", "name": "Unknown", "channelCount": 2}
    assert sum(s["channelCount"] for s in countries) == 5
    assert categories[0] == {"name": "General", "count": 3}
    assert sum(s["count"] for s in categories) == 5


def test_resync_replaces_identifiers(client):
    sync(client)
    first_ids = {c["id"] for c in client.get("/api/channels").json()}

    sync(client)
    second_ids = {c["id"] for c in client.get("/api/channels").json()}

    assert len(second_ids) == 5
    assert first_ids.isdisjoint(second_ids)
    assert client.get(f"/api/channels/{min(first_ids)}").status_code == 404
