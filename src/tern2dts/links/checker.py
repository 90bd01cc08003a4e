"""
Link Checker - Report documentation links whose anchor does not exist.

Every ``!url`` of a Tern document is collected and grouped by page. Each page
is fetched once and an anchor is reported unless exactly one element carries
it as ``id``. Links that are not http(s) cannot be checked and are reported as
a whole.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

import requests
from bs4 import BeautifulSoup

from tern2dts.utils.fetch import DEFAULT_TIMEOUT, fetch_text, is_url

logger = logging.getLogger(__name__)


@dataclass
class LinkReport:
    """Problems found on one documentation page."""
    page: str
    missing_anchors: List[str] = field(default_factory=list)
    unreachable: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.unreachable and not self.missing_anchors

    def invalid_urls(self) -> List[str]:
        if self.unreachable:
            return [self.page]
        return [f"{self.page}#{anchor}" for anchor in self.missing_anchors]


def iter_urls(node: Any) -> Iterator[str]:
    """Yield every ``!url`` value of a document, depth first."""
    if not isinstance(node, dict):
        return
    url = node.get("!url")
    if url:
        yield str(url)
    for key, value in node.items():
        if key != "!url":
            yield from iter_urls(value)


def group_anchors(urls: List[str]) -> Dict[str, List[str]]:
    """Group ``page#anchor`` URLs by page, sorted by page."""
    pages: Dict[str, List[str]] = {}
    for url in sorted(urls):
        page, _, anchor = url.partition("#")
        anchors = pages.setdefault(page, [])
        if anchor and anchor not in anchors:
            anchors.append(anchor)
    return pages


def missing_anchors(html: str, anchors: List[str]) -> List[str]:
    """Anchors that do not name exactly one element of the page."""
    soup = BeautifulSoup(html, "html.parser")
    return [a for a in anchors if len(soup.find_all(id=a)) != 1]


class LinkChecker:
    """
    Check the documentation links of a Tern document.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.session = session

    def check(self, document: Dict[str, Any]) -> List[LinkReport]:
        """
        Check every link of a document.

        Args:
            document: Raw Tern document

        Returns:
            One report per page, valid pages included
        """
        reports = []
        for page, anchors in group_anchors(list(iter_urls(document))).items():
            reports.append(self.check_page(page, anchors))
        return reports

    def check_page(self, page: str, anchors: List[str]) -> LinkReport:
        if not is_url(page):
            logger.debug("%s is not an http(s) link", page)
            return LinkReport(page, unreachable=True)
        if not anchors:
            return LinkReport(page)
        html = fetch_text(page, timeout=self.timeout, session=self.session)
        missing = missing_anchors(html, anchors)
        if missing:
            logger.debug("%s: %d of %d anchors missing", page, len(missing), len(anchors))
        return LinkReport(page, missing_anchors=missing)


def find_invalid_urls(
    document: Dict[str, Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> List[str]:
    """List every link of the document that does not resolve."""
    invalid = []
    for report in LinkChecker(timeout).check(document):
        invalid.extend(report.invalid_urls())
    return invalid
