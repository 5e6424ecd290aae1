import pytest

from api.api import classify_email, classify_url
from history import HistoryStore


@pytest.fixture
def store():
    s = HistoryStore(":memory:")
    s.init_db()
    yield s
    s.close()


def test_empty_stats(store):
    assert store.get_stats() == {
        "totalDetections": 0,
        "urlDetections": 0,
        "emailDetections": 0,
        "phishingFound": 0,
        "spamFound": 0,
        "safeItems": 0,
    }


def test_url_detection_roundtrip_keeps_unrounded_confidence(store):
    result = classify_url("http://192.168.1.1/login")
    store.record_url_detection(result)
    row = store._conn.execute("SELECT confidence_score FROM url_detections").fetchone()
    assert row["confidence_score"] == result.confidence

    found = store.get_existing_url_detection("http://192.168.1.1/login")
    assert found["url"] == "http://192.168.1.1/login"
    assert found["isPhishing"] is result.is_phishing
    assert found["features"] == result.features.as_dict()


def test_latest_detection_wins(store):
    store.record_url_detection(classify_url("https://example.com"))
    store._conn.execute("UPDATE url_detections SET is_phishing = 1")
    store.record_url_detection(classify_url("https://example.com"))
    assert store.get_existing_url_detection("https://example.com")["isPhishing"] is False


def test_unknown_url_returns_none(store):
    assert store.get_existing_url_detection("https://unknown.test") is None


def test_email_detection_counts(store):
    store.record_email_detection(classify_email("Meeting", "See you", "bob@example.com"), "See you")
    store.record_email_detection(
        classify_email("FREE CASH NOW!!!", "CLAIM YOUR PRIZE", "admin@lottery99999.biz"),
        "CLAIM YOUR PRIZE",
    )
    stats = store.get_stats()
    assert stats["emailDetections"] == 2
    assert stats["spamFound"] == 1
    assert stats["safeItems"] == 1


def test_negative_stats_limit_counts_nothing(store):
    for _ in range(3):
        store.record_url_detection(classify_url("https://example.com"))
    assert store.get_stats(-1)["totalDetections"] == 0
    assert store.get_stats(2)["totalDetections"] == 2
