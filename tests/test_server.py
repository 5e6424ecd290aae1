import pytest

from config import Settings
from server import create_app

PHISHY = "http://192.168.1.1/login/secure/verify/account@evil.com/a/b/c/d/e/f"

SPAM = {
    "subject": "URGENT: You won $$$ money!!!",
    "content": "Claim now: http://a.io http://b.io http://c.io http://d.io http://e.io",
    "sender": "noreply@promo123456.com",
}


@pytest.fixture
def client(tmp_path):
    app = create_app(Settings(history_db=str(tmp_path / "history.db")))
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


@pytest.fixture
def stateless_client():
    app = create_app(Settings(history_enabled=False))
    with app.test_client() as c:
        yield c


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "healthy", "history": True}


def test_detect_phishing_url(client):
    resp = client.post("/detect-phishing-url", json={"url": PHISHY})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["isPhishing"] is True
    assert body["confidence"] == 0.55
    assert body["features"]["hasAtSymbol"] is True
    assert body["message"].startswith("Warning")


def test_url_is_trimmed_and_lowercased_before_scoring(client):
    body = client.post("/detect-phishing-url", json={"url": "  HTTPS://Example.COM  "}).get_json()
    assert body["url"] == "https://example.com"
    assert body["features"]["hasHttps"] is True
    assert body["features"]["length"] == 19
    assert body["isPhishing"] is False
    assert body["confidence"] == 1.0


@pytest.mark.parametrize("payload", [{}, {"url": ""}, {"url": 5}, {"url": "   "}])
def test_detect_phishing_url_rejects_bad_payload(client, payload):
    resp = client.post("/detect-phishing-url", json=payload)
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Valid URL required"}


def test_non_json_body_is_a_validation_error(client):
    resp = client.post("/detect-phishing-url", data="url=x", content_type="text/plain")
    assert resp.status_code == 400


def test_detect_spam_email(client):
    resp = client.post("/detect-spam-email", json=SPAM)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["isSpam"] is True
    assert body["confidence"] == 0.65
    assert body["subject"] == SPAM["subject"]
    assert "content" not in body


def test_detect_spam_email_requires_all_fields(client):
    resp = client.post("/detect-spam-email", json={"subject": "hi", "content": "there"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Subject, content, and sender are required"


def test_stats_and_cached_lookup(client):
    client.post("/detect-phishing-url", json={"url": PHISHY})
    client.post("/detect-phishing-url", json={"url": "https://example.com"})
    client.post("/detect-spam-email", json=SPAM)

    stats = client.get("/stats").get_json()
    assert stats == {
        "totalDetections": 3,
        "urlDetections": 2,
        "emailDetections": 1,
        "phishingFound": 1,
        "spamFound": 1,
        "safeItems": 1,
    }

    found = client.get("/detections/url", query_string={"url": "HTTPS://EXAMPLE.COM"})
    assert found.status_code == 200
    assert found.get_json()["isPhishing"] is False
    assert found.get_json()["features"]["hasHttps"] is True

    missing = client.get("/detections/url", query_string={"url": "https://nowhere.test"})
    assert missing.status_code == 404


def test_stats_limit(client):
    for _ in range(3):
        client.post("/detect-phishing-url", json={"url": "https://example.com"})
    assert client.get("/stats?limit=2").get_json()["totalDetections"] == 2


def test_history_disabled(stateless_client):
    assert stateless_client.post("/detect-phishing-url", json={"url": PHISHY}).status_code == 200
    assert stateless_client.get("/stats").status_code == 404
    assert stateless_client.get("/detections/url?url=x").status_code == 404


def test_unknown_route_keeps_http_status(client):
    assert client.get("/nope").status_code == 404
    assert client.get("/detect-phishing-url").status_code == 405


def test_negative_stats_limit_is_clamped(client):
    client.post("/detect-phishing-url", json={"url": "https://example.com"})
    assert client.get("/stats?limit=-1").get_json()["totalDetections"] == 0
