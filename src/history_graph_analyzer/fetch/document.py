"""Queryable view over a parsed encyclopedia page."""

from bs4 import BeautifulSoup, Tag

from ..errors import ParseError

CONTENT_SELECTOR = "#mw-content-text"
INFOBOX_ROW_SELECTOR = ".infobox tr"


class PageDocument:
    """A parsed page exposing the lookups the extractors need.

    Usage:
        doc = PageDocument.from_html(html, subject="Isaac Newton")
        doc.first_paragraph()
        doc.infobox_value("Born")
    """

    def __init__(self, soup: BeautifulSoup, subject: str = "", url: str = ""):
        self.soup = soup
        self.subject = subject
        self.url = url

    @classmethod
    def from_html(cls, html: str, subject: str = "", url: str = "") -> "PageDocument":
        """Parse raw markup.

        Raises:
            ParseError: If the markup is empty or has no element structure.
        """
        if not html or not html.strip():
            raise ParseError(f"Empty page for {subject!r}", subject=subject)

        soup = BeautifulSoup(html, "html.parser")
        if soup.find() is None:
            raise ParseError(f"No markup found in page for {subject!r}", subject=subject)

        return cls(soup, subject=subject, url=url)

    @property
    def content(self) -> Tag:
        """Main content area, falling back to the whole document."""
        return self.soup.select_one(CONTENT_SELECTOR) or self.soup.body or self.soup

    def select_text(self, selector: str) -> str:
        """Concatenated text of every element matching a CSS selector."""
        return "".join(el.get_text() for el in self.soup.select(selector))

    def paragraphs(self) -> list[str]:
        return [p.get_text() for p in self.content.find_all("p")]

    def first_paragraph(self) -> str:
        """First non-blank paragraph of the main content."""
        for text in self.paragraphs():
            if text.strip():
                return text
        return ""

    def headings(self) -> list[str]:
        return [h.get_text() for h in self.content.find_all(["h2", "h3"])]

    def content_text(self) -> str:
        """Visible text of the main content, one paragraph or heading per line."""
        lines = self.paragraphs() + self.headings()
        return "".join(line + "\n" for line in lines)

    def infobox_rows(self) -> list[tuple[str, str]]:
        """(label, value) pairs from the infobox table, in document order."""
        rows = []
        for row in self.soup.select(INFOBOX_ROW_SELECTOR):
            header = row.find("th")
            value = row.find("td")
            if header is None or value is None:
                continue
            rows.append((header.get_text(), value.get_text()))
        return rows

    def infobox_value(self, label: str) -> str | None:
        """Value of the first infobox row whose label contains `label`."""
        for header, value in self.infobox_rows():
            if label in header:
                return value
        return None
