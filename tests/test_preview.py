"""Tests for mail preview helpers."""

from datetime import datetime

import pytest

from flaremail.mailbox.preview import (
    NO_SUBJECT,
    display_subject,
    friendly_time,
    sender_initials,
    sender_name,
    snippet,
)


NOW = datetime(2024, 3, 15, 18, 0)


class TestSnippet:
    def test_plain_text_collapsed(self):
        assert snippet("Hello\n\n  world\t!") == "Hello world !"

    def test_html_converted(self):
        text = snippet("<html><body><h1>Sale</h1><p>Everything <b>50%</b> off</p></body></html>")

        assert "Sale" in text
        assert "Everything 50% off" in text
        assert "<" not in text

    def test_truncated(self):
        assert snippet("x" * 500, length=10) == "x" * 10

    def test_empty(self):
        assert snippet(None) == ""
        assert snippet("") == ""


class TestSender:
    @pytest.mark.parametrize("sender, name, initials", [
        ("Jane Doe <jane@x.com>", "Jane Doe", "JD"),
        ('"Outlook" <no-reply@microsoft.com>', "Outlook", "OU"),
        ("noreply@x.com", "noreply@x.com", "NO"),
        (None, "", "?"),
    ])
    def test_name_and_initials(self, sender, name, initials):
        assert sender_name(sender) == name
        assert sender_initials(sender) == initials


class TestDisplaySubject:
    def test_placeholder(self):
        assert display_subject(None) == NO_SUBJECT
        assert display_subject("   ") == NO_SUBJECT
        assert display_subject(" Hi ") == "Hi"


class TestFriendlyTime:
    @pytest.mark.parametrize("received, expected", [
        ("2024-03-15T09:05:00", "09:05"),
        ("2024-03-14T23:00:00", "Yesterday"),
        ("2024-03-11T10:00:00", "Mon"),
        ("2024-02-03T10:00:00", "Feb 3"),
        (None, "-"),
        ("not a date", "-"),
    ])
    def test_friendly_time(self, received, expected):
        assert friendly_time(received, now=NOW) == expected
