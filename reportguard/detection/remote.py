"""
Remote detection service adapter.

Sends text to an external detection service and converts its response
into Candidates in the engine's own vocabulary. Placeholders are never
taken from the service; the local redactor derives them afterwards.

Request:
    POST {base_url}/v1/ai-detect
    {"text": "...", "enable_ai": true, "entity_types": [...]}   # entity_types optional

Response (either shape is accepted):
    {"detections": [{"type", "value", "position": {"start", "end"}, "severity"?, "confidence"?}]}
    {"entities":   [{"type", "value", "start", "end", "confidence"?}]}

Usage:
    >>> adapter = RemoteDetectionAdapter("https://detect.example.com", api_key="...")
    >>> payload = adapter.fetch("Contact me at john@example.com")
    >>> candidates = normalize_response(text, payload, confidence_threshold=0.4)
"""

import logging
import math
import re
from typing import Any, Dict, List, Optional

import httpx

from ..core.exceptions import RemoteDetectionError
from .constants import (
    DEFAULT_REMOTE_TIMEOUT,
    REMOTE_DEFAULT_CONFIDENCE,
    REMOTE_DEFAULT_SEVERITY,
    REMOTE_DETECT_PATH,
)
from .types import Candidate, Severity

logger = logging.getLogger(__name__)


# Entity type mapping: service labels -> engine types
LABEL_MAP = {
    # Contact info
    "EMAIL_ADDRESS": "EMAIL",
    "PHONE_NUMBER": "PHONE",
    "PHONE_UK": "PHONE_UK_LANDLINE",
    "UK_PHONE": "PHONE_UK_LANDLINE",
    "UK_MOBILE": "PHONE_UK_MOBILE",
    "MOBILE_UK": "PHONE_UK_MOBILE",
    "US_PHONE": "PHONE_US",
    "INTERNATIONAL_PHONE": "PHONE_INTL",

    # People
    "PERSON": "NAME",
    "PERSON_NAME": "NAME",
    "FULL_NAME": "NAME",

    # Government identifiers
    "US_SSN": "SSN",
    "USA_SOCIAL_SECURITY_NUMBER": "SSN",
    "NATIONAL_INSURANCE": "NI_NUMBER",
    "UK_NATIONAL_INSURANCE_NUMBER": "NI_NUMBER",
    "NINO": "NI_NUMBER",
    "UK_PASSPORT": "PASSPORT_UK",
    "US_PASSPORT": "PASSPORT_US",
    "UK_DRIVING_LICENCE": "DRIVERS_LICENSE_UK",
    "UK_DRIVERS_LICENSE": "DRIVERS_LICENSE_UK",

    # Financial
    "CREDIT_CARD_NUMBER": "CREDIT_CARD",
    "IBAN_CODE": "IBAN",
    "UK_SORT_CODE": "SORT_CODE_UK",
    "UK_BANK_ACCOUNT": "BANK_ACCOUNT_UK",

    # Location
    "ADDRESS": "UK_ADDRESS",
    "UK_POSTCODE": "POSTCODE_UK",
    "POSTCODE": "POSTCODE_UK",
    "US_ZIP_CODE": "POSTCODE_US",
    "ZIP_CODE": "POSTCODE_US",

    # Network
    "IP": "IP_ADDRESS",
    "IPV4": "IP_ADDRESS",
    "IPV4_ADDRESS": "IP_ADDRESS",
    "IPV6": "IPV6_ADDRESS",

    # Dates
    "DOB": "DATE_OF_BIRTH",
    "DATE_TIME": "DATE",

    # Staff identifiers
    "EMPLOYEE_NUMBER": "EMPLOYEE_ID",
    "STAFF_ID": "EMPLOYEE_ID",
}

_NON_IDENTIFIER = re.compile(r"[^A-Z0-9]+")


def normalize_label(label: str) -> str:
    """Map a service label to the engine vocabulary."""
    key = _NON_IDENTIFIER.sub("_", str(label).strip().upper()).strip("_")
    return LABEL_MAP.get(key, key)


class RemoteDetectionAdapter:
    """
    HTTP transport to the remote detection service.

    ``fetch`` raises RemoteDetectionError for any transport or status
    failure, or a body that is not a JSON object. It has no retry logic;
    the caller decides how to degrade.
    """

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_REMOTE_TIMEOUT,
        enable_ai: bool = True,
        entity_types: Optional[List[str]] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = (base_url or "").rstrip("/")
        self.enable_ai = enable_ai
        self.entity_types = list(entity_types) if entity_types else None
        self._api_key = api_key
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_config(cls, config, client: Optional[httpx.Client] = None) -> "RemoteDetectionAdapter":
        """Build an adapter from a DetectionConfig."""
        return cls(
            base_url=config.remote_url,
            api_key=config.api_key,
            timeout=config.remote_timeout_seconds,
            enable_ai=config.enable_context_analysis,
            entity_types=config.entity_types,
            client=client,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}{REMOTE_DETECT_PATH}"

    def build_request_body(self, text: str) -> Dict[str, Any]:
        body: Dict[str, Any] = {"text": text, "enable_ai": self.enable_ai}
        if self.entity_types:
            body["entity_types"] = self.entity_types
        return body

    def fetch(self, text: str) -> Dict[str, Any]:
        """
        POST ``text`` to the service and return the decoded JSON body.

        Raises:
            RemoteDetectionError: on transport error, non-2xx status or a
                body that is not a JSON object
        """
        if not self.base_url:
            raise RemoteDetectionError("Remote detection URL is not configured")

        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["x-api-key"] = self._api_key

        # SECURITY: Log only the length, never the text
        logger.debug(f"Remote detection request: {len(text)} chars to {self.url}")

        try:
            response = self._client.post(
                self.url,
                json=self.build_request_body(text),
                headers=headers,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise RemoteDetectionError(
                f"Remote detection returned HTTP {e.response.status_code}",
                url=self.url,
                status_code=e.response.status_code,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RemoteDetectionError(
                f"Remote detection request failed: {type(e).__name__}",
                url=self.url,
            ) from e
        except ValueError as e:
            raise RemoteDetectionError("Remote detection returned invalid JSON", url=self.url) from e

        if not isinstance(payload, dict):
            raise RemoteDetectionError("Remote detection response is not a JSON object", url=self.url)

        return payload

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "RemoteDetectionAdapter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def _entry_span(entry: Dict[str, Any]):
    position = entry.get("position")
    if isinstance(position, dict):
        return position.get("start"), position.get("end")
    return entry.get("start"), entry.get("end")


def normalize_response(
    text: str,
    payload: Dict[str, Any],
    confidence_threshold: float = 0.0,
    priorities: Optional[Dict[str, int]] = None,
) -> List[Candidate]:
    """
    Convert a service response into Candidates.

    Entries are dropped when their confidence is below the threshold,
    their span falls outside ``text``, or their ``value`` disagrees with
    the text at that span. Missing ``value`` is recovered from the span.
    Missing severity defaults to medium and missing confidence to 1.0.

    Args:
        text: The text that was sent
        payload: Decoded response body
        confidence_threshold: Minimum confidence to keep an entry
        priorities: Optional type -> priority used to break ties later

    Returns:
        Candidates in response order; they may still overlap.

    Raises:
        RemoteDetectionError: if the body has neither a ``detections``
            nor an ``entities`` list
    """
    entries = payload.get("detections")
    if entries is None:
        entries = payload.get("entities")
    if not isinstance(entries, list):
        raise RemoteDetectionError("Remote detection response has no detections list")

    priorities = priorities or {}
    candidates: List[Candidate] = []
    dropped = 0

    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("type"):
            dropped += 1
            continue

        start, end = _entry_span(entry)
        if isinstance(start, bool) or isinstance(end, bool):
            dropped += 1
            continue
        if not isinstance(start, int) or not isinstance(end, int):
            dropped += 1
            continue
        if not 0 <= start < end <= len(text):
            dropped += 1
            continue

        span_text = text[start:end]
        value = entry.get("value")
        if value is not None and value != span_text:
            dropped += 1
            continue

        confidence = entry.get("confidence")
        if confidence is None:
            confidence = REMOTE_DEFAULT_CONFIDENCE
        try:
            confidence = float(confidence)
        except (TypeError, ValueError):
            dropped += 1
            continue
        if math.isnan(confidence) or confidence < confidence_threshold:
            dropped += 1
            continue

        rule_type = normalize_label(entry["type"])
        candidates.append(Candidate(
            rule_type=rule_type,
            priority=priorities.get(rule_type, 0),
            start=start,
            end=end,
            raw_text=span_text,
            severity=Severity.parse(entry.get("severity") or REMOTE_DEFAULT_SEVERITY),
            confidence=confidence,
        ))

    if dropped:
        logger.debug(f"Remote detection: kept {len(candidates)}, dropped {dropped} entries")

    return candidates
