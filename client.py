"""Small HTTP client for the detection service."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from config import get_settings

logger = logging.getLogger("client")


class DetectionServiceError(RuntimeError):
    """The detection service answered with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: requests.Response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return default


class DetectionClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 user_agent: Optional[str] = None, session: Optional[requests.Session] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent or settings.user_agent,
            "Content-Type": "application/json",
        })

    def _post(self, path: str, payload: Dict, default_error: str) -> Dict:
        response = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        if not response.ok:
            raise DetectionServiceError(_error_message(response, default_error), response.status_code)
        return response.json()

    def get_existing_url_detection(self, url: str) -> Optional[Dict]:
        """Return the stored verdict for ``url``, or None when the service has none."""
        try:
            response = self.session.get(f"{self.base_url}/detections/url",
                                        params={"url": url}, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Cached detection lookup failed: %s", exc)
            return None
        if not response.ok:
            return None
        return response.json()

    def detect_phishing_url(self, url: str) -> Dict:
        existing = self.get_existing_url_detection(url)
        if existing:
            return existing
        return self._post("/detect-phishing-url", {"url": url}, "Failed to detect phishing URL")

    def detect_spam_email(self, subject: str, content: str, sender: str) -> Dict:
        return self._post(
            "/detect-spam-email",
            {"subject": subject, "content": content, "sender": sender},
            "Failed to detect spam email",
        )

    def get_stats(self) -> Dict:
        response = self.session.get(f"{self.base_url}/stats", timeout=self.timeout)
        if not response.ok:
            raise DetectionServiceError(_error_message(response, "Failed to load stats"),
                                        response.status_code)
        return response.json()
