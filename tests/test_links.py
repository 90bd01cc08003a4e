"""Tests for the documentation link checker."""

from unittest.mock import MagicMock

import pytest
import requests

from tern2dts.errors import FetchError
from tern2dts.links import (
    LinkChecker,
    LinkReport,
    group_anchors,
    iter_urls,
    missing_anchors,
)

PAGE = """
<html><body>
<h2 id="present">present</h2>
<h2 id="title">title</h2>
<h2 id="title">title again</h2>
</body></html>
"""


def mock_session(text=PAGE, error=None):
    """Session whose get() returns one canned page."""
    session = MagicMock()
    response = MagicMock()
    response.text = text
    if error is not None:
        response.raise_for_status.side_effect = error
    session.get.return_value = response
    return session


class TestUrlCollection:
    """Tests for collecting and grouping links."""

    def test_iter_urls_is_recursive(self):
        document = {
            "Alert": {
                "!url": "https://docs.example/alert/",
                "present": {"!url": "https://docs.example/alert/#present"},
            },
            "!name": "doc",
        }
        assert list(iter_urls(document)) == [
            "https://docs.example/alert/",
            "https://docs.example/alert/#present",
        ]

    def test_group_anchors(self):
        urls = [
            "https://docs.example/b/#y",
            "https://docs.example/a/#x",
            "https://docs.example/a/",
            "https://docs.example/a/#x",
        ]
        assert group_anchors(urls) == {
            "https://docs.example/a/": ["x"],
            "https://docs.example/b/": ["y"],
        }


class TestLinkChecker:
    """Tests for LinkChecker."""

    def test_missing_anchors(self):
        """Anchors must name exactly one element."""
        assert missing_anchors(PAGE, ["present", "title", "gone"]) == ["title", "gone"]

    def test_check_page(self):
        checker = LinkChecker(session=mock_session())
        report = checker.check_page("https://docs.example/alert/", ["present", "gone"])
        assert report.missing_anchors == ["gone"]
        assert report.invalid_urls() == ["https://docs.example/alert/#gone"]
        assert not report.is_valid

    def test_non_http_page_is_reported(self):
        report = LinkChecker(session=mock_session()).check_page("scriptable://docs?x", ["a"])
        assert report.unreachable
        assert report.invalid_urls() == ["scriptable://docs?x"]

    def test_page_without_anchors_is_not_fetched(self):
        session = mock_session()
        report = LinkChecker(session=session).check_page("https://docs.example/", [])
        assert report.is_valid
        session.get.assert_not_called()

    def test_check_document(self):
        document = {
            "Alert": {
                "!url": "https://docs.example/alert/#present",
                "x": {"!url": "https://docs.example/alert/#gone"},
            },
        }
        session = mock_session()
        reports = LinkChecker(session=session).check(document)
        assert len(reports) == 1
        assert reports[0].missing_anchors == ["gone"]
        session.get.assert_called_once()

    def test_fetch_failure_raises(self):
        session = mock_session(error=requests.HTTPError("404"))
        with pytest.raises(FetchError):
            LinkChecker(session=session).check_page("https://docs.example/x/", ["a"])

    def test_valid_report(self):
        assert LinkReport("https://docs.example/").is_valid
