"""
Tests for redaction, restoration and result transforms.
"""

import random

import pytest

from reportguard.detection import detect
from reportguard.detection.redactor import (
    HighlightSegment,
    format_type,
    highlight_segments,
    make_placeholder,
    redact,
    redact_all,
    redact_one,
    restore,
    summarize_stats,
)
from reportguard.detection.types import Candidate, Severity


def _cand(rule_type, text, value, occurrence=0):
    start = -1
    for _ in range(occurrence + 1):
        start = text.index(value, start + 1)
    return Candidate(
        rule_type=rule_type,
        priority=10,
        start=start,
        end=start + len(value),
        raw_text=value,
        severity=Severity.HIGH,
    )


class TestRedact:
    """Tests for placeholder assignment and substitution."""

    def test_placeholder_format(self):
        """Placeholders are [TYPE_n]."""
        assert make_placeholder("EMAIL", 3) == "[EMAIL_3]"

    def test_numbering_per_type_in_start_order(self):
        """Numbering counts each type separately, left to right."""
        text = "b@x.com a@x.com 07911 123456 c@x.com"
        accepted = [
            _cand("EMAIL", text, "c@x.com"),
            _cand("PHONE_UK_MOBILE", text, "07911 123456"),
            _cand("EMAIL", text, "b@x.com"),
            _cand("EMAIL", text, "a@x.com"),
        ]
        result = redact(text, accepted)

        assert result.redacted_text == "[EMAIL_1] [EMAIL_2] [PHONE_UK_MOBILE_1] [EMAIL_3]"
        assert [d.original for d in result.detections] == [
            "b@x.com", "a@x.com", "07911 123456", "c@x.com",
        ]
        assert dict(result.stats) == {"EMAIL": 3, "PHONE_UK_MOBILE": 1}

    def test_detections_sorted_by_start(self):
        """Detections come back in ascending start order."""
        text = "one two three"
        result = redact(text, [_cand("W", text, "three"), _cand("W", text, "one")])
        assert [d.start for d in result.detections] == [0, 8]

    def test_no_candidates(self):
        """No candidates leaves the text unchanged."""
        result = redact("nothing here", [])
        assert result.redacted_text == "nothing here"
        assert not result.has_pii
        assert dict(result.stats) == {}

    def test_detection_fields(self):
        """Detections carry type, span, value and severity."""
        text = "id 123-45-6789"
        (d,) = redact(text, [_cand("SSN", text, "123-45-6789")]).detections

        assert d.type == "SSN"
        assert d.original == text[d.start:d.end]
        assert d.severity is Severity.HIGH

    def test_result_is_immutable(self):
        """Published results cannot be mutated."""
        result = redact("a@x.com", [_cand("EMAIL", "a@x.com", "a@x.com")])
        with pytest.raises(TypeError):
            result.stats["EMAIL"] = 5
        with pytest.raises(AttributeError):
            result.redacted_text = "changed"


class TestRestore:
    """Tests for reversing a redaction."""

    def test_restores_detected_text(self):
        """restore() undoes a real detection."""
        text = "Contact me at john.doe@example.com or 07911 123456"
        result = detect(text)
        assert restore(result.redacted_text, result.detections) == text

    def test_literal_placeholder_text_left_alone(self):
        """Placeholder-looking text in the input is not confused with a detection."""
        text = "[EMAIL_1] was sent to a@x.com"
        result = redact(text, [_cand("EMAIL", text, "a@x.com")])

        assert result.redacted_text == "[EMAIL_1] was sent to [EMAIL_1]"
        assert restore(result.redacted_text, result.detections) == text

    def test_literal_placeholder_before_later_detection(self):
        """A literal placeholder earlier in the text does not capture a later value."""
        text = "[EMAIL_2] a@x.com b@x.com"
        result = redact(text, [_cand("EMAIL", text, "a@x.com"), _cand("EMAIL", text, "b@x.com")])

        assert result.redacted_text == "[EMAIL_2] [EMAIL_1] [EMAIL_2]"
        assert restore(result.redacted_text, result.detections) == text

    def test_round_trip_random_corpus(self):
        """restore(redact(text)) == text over a seeded random corpus."""
        rng = random.Random(1234)
        values = [
            ("EMAIL", "sam.lee@example.co.uk"),
            ("PHONE_UK_MOBILE", "07700 900123"),
            ("SSN", "123-45-6789"),
            ("IP_ADDRESS", "10.0.0.1"),
            ("NAME", "John Smith"),
        ]
        filler = ["the", "report", "said", "on", "Monday", ",", "and", "[NAME_1]", "x"]

        for _ in range(200):
            accepted = []
            text = ""
            for _ in range(rng.randint(0, 12)):
                if rng.random() < 0.3:
                    rule_type, value = rng.choice(values)
                    start = len(text)
                    text += value
                    accepted.append(Candidate(
                        rule_type=rule_type,
                        priority=10,
                        start=start,
                        end=start + len(value),
                        raw_text=value,
                    ))
                else:
                    text += rng.choice(filler)
                text += " "

            rng.shuffle(accepted)
            result = redact(text, accepted)
            assert restore(result.redacted_text, result.detections) == text


class TestRedactOne:
    """Tests for single-detection redaction."""

    def test_uses_span(self):
        """The recorded span is replaced when it still holds the value."""
        text = "a@x.com and a@x.com"
        result = redact(text, [_cand("EMAIL", text, "a@x.com", occurrence=1)])
        (d,) = result.detections

        assert redact_one(text, d) == "a@x.com and [EMAIL_1]"

    def test_falls_back_to_first_occurrence(self):
        """When offsets moved, the first occurrence is replaced."""
        text = "x a@x.com y 07911 123456"
        result = redact(text, [
            _cand("EMAIL", text, "a@x.com"),
            _cand("PHONE_UK_MOBILE", text, "07911 123456"),
        ])
        email, phone = result.detections

        partly = redact_one(text, email)
        assert partly == "x [EMAIL_1] y 07911 123456"
        assert redact_one(partly, phone) == result.redacted_text

    def test_missing_value_unchanged(self):
        """Text without the value comes back unchanged."""
        text = "a@x.com"
        (d,) = redact(text, [_cand("EMAIL", text, "a@x.com")]).detections
        assert redact_one("nothing", d) == "nothing"

    def test_redact_all(self):
        """redact_all returns the fully redacted text."""
        text = "a@x.com"
        result = redact(text, [_cand("EMAIL", text, "a@x.com")])
        assert redact_all(result) == "[EMAIL_1]"


class TestHighlightSegments:
    """Tests for display segmentation."""

    def test_segments(self):
        """Plain and PII runs alternate and reassemble the text."""
        text = "Mail a@x.com now"
        result = redact(text, [_cand("EMAIL", text, "a@x.com")])
        segments = highlight_segments(text, result.detections)

        assert segments == [
            HighlightSegment(text="Mail "),
            HighlightSegment(text="a@x.com", is_pii=True, type="EMAIL", placeholder="[EMAIL_1]"),
            HighlightSegment(text=" now"),
        ]
        assert "".join(s.text for s in segments) == text

    def test_no_detections(self):
        """Without detections the whole text is one plain segment."""
        assert highlight_segments("plain", []) == [HighlightSegment(text="plain")]


class TestFormatType:
    """Tests for display labels."""

    def test_known_and_unknown(self):
        """Known types get a label; others are de-underscored."""
        assert format_type("EMAIL") == "Email Address"
        assert format_type("SOMETHING_NEW") == "SOMETHING NEW"


class TestSummarizeStats:
    """Tests for the per-type monitoring summary."""

    def test_summary(self):
        """Totals are summed and the largest count is the most common type."""
        summary = summarize_stats({"EMAIL": 2, "NAME": 3, "SSN": 1})

        assert summary.total_detected == 6
        assert summary.most_common_type == "NAME"
        assert summary.type_breakdown == {"EMAIL": 2, "NAME": 3, "SSN": 1}

    def test_tie_goes_to_first_seen(self):
        """Equal counts resolve to the type listed first."""
        assert summarize_stats({"SSN": 1, "EMAIL": 1}).most_common_type == "SSN"

    def test_empty(self):
        """No detections means no most common type."""
        summary = summarize_stats({})

        assert summary.total_detected == 0
        assert summary.most_common_type is None

    def test_from_result(self):
        """Works directly on a result's stats."""
        result = detect("cc jane@example.org and bob@example.net, SSN 123-45-6789")
        summary = summarize_stats(result.stats)

        assert summary.total_detected == 3
        assert summary.most_common_type == "EMAIL"
