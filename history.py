"""SQLite-backed detection history for the HTTP service."""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Dict, Optional

from api.api import EmailClassification, URLClassification, url_response

logger = logging.getLogger("history")

SCHEMA = """
CREATE TABLE IF NOT EXISTS url_detections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    url TEXT NOT NULL,
    is_phishing INTEGER NOT NULL,
    confidence_score REAL NOT NULL,
    features TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_url_detections_url ON url_detections (url);
CREATE TABLE IF NOT EXISTS email_detections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    subject TEXT NOT NULL,
    content TEXT NOT NULL,
    sender TEXT NOT NULL,
    is_spam INTEGER NOT NULL,
    confidence_score REAL NOT NULL,
    features TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS detection_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    detection_type TEXT NOT NULL,
    result TEXT NOT NULL,
    confidence REAL NOT NULL,
    created_at TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class HistoryStore:
    """Stores every verdict with its feature vector, plus a combined history table."""

    def __init__(self, db_path: str = "detections.db"):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row

    def init_db(self) -> None:
        with self._lock:
            self._conn.executescript(SCHEMA)
            self._conn.commit()
        logger.info("History database ready at %s", self.db_path)

    def close(self) -> None:
        self._conn.close()

    def record_url_detection(self, result: URLClassification) -> None:
        created = _now()
        with self._lock:
            self._conn.execute(
                "INSERT INTO url_detections (url, is_phishing, confidence_score, features, created_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (result.url, int(result.is_phishing), result.confidence,
                 json.dumps(result.features.as_dict()), created),
            )
            self._conn.execute(
                "INSERT INTO detection_history (detection_type, result, confidence, created_at) "
                "VALUES (?, ?, ?, ?)",
                ("url", "phishing" if result.is_phishing else "safe", result.confidence, created),
            )
            self._conn.commit()

    def record_email_detection(self, result: EmailClassification, content: str) -> None:
        created = _now()
        with self._lock:
            self._conn.execute(
                "INSERT INTO email_detections "
                "(subject, content, sender, is_spam, confidence_score, features, created_at) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (result.subject, content, result.sender, int(result.is_spam), result.confidence,
                 json.dumps(result.features.as_dict()), created),
            )
            self._conn.execute(
                "INSERT INTO detection_history (detection_type, result, confidence, created_at) "
                "VALUES (?, ?, ?, ?)",
                ("email", "spam" if result.is_spam else "safe", result.confidence, created),
            )
            self._conn.commit()

    def get_existing_url_detection(self, url: str) -> Optional[Dict]:
        """Most recent stored verdict for a URL, in response-envelope form."""
        with self._lock:
            row = self._conn.execute(
                "SELECT url, is_phishing, confidence_score, features FROM url_detections "
                "WHERE url = ? ORDER BY id DESC LIMIT 1",
                (url,),
            ).fetchone()
        if row is None:
            return None
        try:
            features = json.loads(row["features"] or "{}")
        except json.JSONDecodeError:
            logger.warning("Stored features for %s are not valid JSON", url)
            features = {}
        return url_response(row["url"], bool(row["is_phishing"]), row["confidence_score"], features)

    def get_stats(self, limit: int = 100) -> Dict[str, int]:
        """Counts over the latest ``limit`` history rows."""
        with self._lock:
            rows = self._conn.execute(
                "SELECT detection_type, result FROM detection_history ORDER BY id DESC LIMIT ?",
                (max(0, limit),),
            ).fetchall()
        types = [r["detection_type"] for r in rows]
        results = [r["result"] for r in rows]
        return {
            "totalDetections": len(rows),
            "urlDetections": types.count("url"),
            "emailDetections": types.count("email"),
            "phishingFound": results.count("phishing"),
            "spamFound": results.count("spam"),
            "safeItems": results.count("safe"),
        }
