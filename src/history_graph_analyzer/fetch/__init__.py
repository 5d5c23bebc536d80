"""Page retrieval and document parsing."""

from history_graph_analyzer.fetch.client import FetchSource, WikipediaClient, page_title, subject_for_id
from history_graph_analyzer.fetch.document import PageDocument

__all__ = ["FetchSource", "WikipediaClient", "PageDocument", "page_title", "subject_for_id"]
