"""Shared fixtures: sample pages and an in-process page source."""

import threading

import pytest

from history_graph_analyzer.config import Settings
from history_graph_analyzer.errors import FetchError
from history_graph_analyzer.fetch.document import PageDocument


NEWTON_HTML = """
<html><head><title>Isaac Newton</title></head><body>
<h1 id="firstHeading">Isaac Newton</h1>
<div id="mw-content-text">
  <table class="infobox biography vcard">
    <tr><th colspan="2">Sir Isaac Newton</th></tr>
    <tr><td colspan="2"><img src="//upload.wikimedia.org/newton.jpg"/></td></tr>
    <tr><th>Born</th><td>Isaac Newton<br/><span class="bday">1643-01-04</span><br/>Woolsthorpe, Lincolnshire, England[1]</td></tr>
    <tr><th>Died</th><td><span class="dday">1727-03-31</span><br/>Kensington, Middlesex</td></tr>
    <tr><th>Citizenship</th><td>English</td></tr>
  </table>
  <p class="mw-empty-elt"></p>
  <p>Sir Isaac Newton (25 December 1642 - 20 March 1727) was an English mathematician, physicist,
  astronomer and author who was a key figure in the Scientific Revolution.[2]</p>
  <h2>Early life</h2>
  <p>Newton was educated at The King's School, Grantham.</p>
</div>
</body></html>
"""

BACH_HTML = """
<html><body><div id="mw-content-text">
  <p>Johann Sebastian Bach (31 March 1685 - 28 July 1750) was a German composer
  and musician of the late Baroque period.</p>
</div></body></html>
"""

SOCRATES_HTML = """
<html><body><div id="mw-content-text">
  <p>Socrates was a Greek philosopher from Athens who is credited as a founder of Western philosophy.</p>
  <p>Plato was his most famous student and recorded many of his dialogues.</p>
  <p>Xenophon also wrote about Socrates.</p>
</div></body></html>
"""

PLATO_HTML = """
<html><body><div id="mw-content-text">
  <p>Plato was an ancient Greek philosopher born in Athens during the Classical period.</p>
  <p>Socrates was his teacher, and Plato later taught Aristotle at the Academy.</p>
</div></body></html>
"""

SAMPLE_PAGES = {
    "Isaac Newton": NEWTON_HTML,
    "Johann Sebastian Bach": BACH_HTML,
    "Socrates": SOCRATES_HTML,
    "Plato": PLATO_HTML,
}


class FakeSource:
    """Page source backed by a dict of subject -> html.

    Lookups are case-insensitive; unknown subjects fail like a 404. When a
    gate is given, fetch blocks until it is set, after signalling `entered`.
    """

    def __init__(self, pages: dict[str, str], gate: threading.Event | None = None):
        self.pages = {subject.lower(): html for subject, html in pages.items()}
        self.gate = gate
        self.entered = threading.Event()
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch(self, subject: str) -> PageDocument:
        with self._lock:
            self.calls.append(subject)
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)

        html = self.pages.get(subject.lower())
        if html is None:
            raise FetchError(
                f"Unexpected status code 404 for {subject!r}",
                subject=subject,
                status_code=404,
            )
        return PageDocument.from_html(html, subject=subject)


@pytest.fixture
def settings():
    """Settings with no throttle delay and one worker per item."""
    return Settings(throttle_seconds=0, max_workers=0)


@pytest.fixture
def source():
    return FakeSource(SAMPLE_PAGES)


@pytest.fixture
def newton_doc():
    return PageDocument.from_html(NEWTON_HTML, subject="Isaac Newton")


@pytest.fixture
def bach_doc():
    return PageDocument.from_html(BACH_HTML, subject="Johann Sebastian Bach")


@pytest.fixture
def newton_html():
    return NEWTON_HTML
