import httpx
import pytest
from fastapi.testclient import TestClient

from capnz.api.capnz import get_capnz_service
from capnz.main import app
from capnz.services.capnz import CapNz

FEED_URL = "https://alerts.metservice.com/cap/rss"
WIND_URL = "https://alerts.metservice.com/cap/alert?id=0001"


@pytest.fixture
def client(config, wind_alert_xml):
    routes = {
        FEED_URL: f"<rss><channel><item><link>{WIND_URL}</link></item></channel></rss>",
        WIND_URL: wind_alert_xml,
    }

    def handler(request: httpx.Request) -> httpx.Response:
        body = routes.get(str(request.url))
        return httpx.Response(200, text=body) if body else httpx.Response(404)

    svc = CapNz(config=config, transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_capnz_service] = lambda: svc
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def offline_client(config):
    svc = CapNz(config=config, transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    app.dependency_overrides[get_capnz_service] = lambda: svc
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_features_from_feed(client):
    r = client.get("/capnz/features")
    assert r.status_code == 200
    body = r.json()
    assert body["type"] == "FeatureCollection"
    assert [f["id"] for f in body["features"]] == ["2.49.0.1.554.0.2025.10.21.0001"]
    assert body["features"][0]["properties"]["style"]["fill-opacity"] == pytest.approx(128 / 255)


def test_feed_down_is_503(offline_client):
    r = offline_client.get("/capnz/features")
    assert r.status_code == 503
    assert r.json()["detail"]["code"] == "capnz_feed_unavailable"


def test_parse_single_document(client, rain_alert_xml):
    r = client.post("/capnz/parse", json={"xml": rain_alert_xml})
    assert r.status_code == 200
    features = r.json()["features"]
    assert [f["geometry"]["type"] for f in features] == ["Polygon", "Point"]
    assert features[0]["properties"]["stroke-width"] == 3


def test_parse_bad_polygon_is_400(client, bad_polygon_xml):
    r = client.post("/capnz/parse", json={"xml": bad_polygon_xml})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "invalid_polygon"


@pytest.mark.parametrize(
    "xml, code",
    [
        ("   ", "bad_cap_request"),
        ("<html/>", "invalid_cap_alert"),
        ("not xml at all", "invalid_cap_alert"),
    ],
)
def test_parse_unusable_input_is_400(client, xml, code):
    r = client.post("/capnz/parse", json={"xml": xml})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == code


def test_parse_requires_xml_field(client):
    assert client.post("/capnz/parse", json={}).status_code == 422
