"""Main coordinator for scraping people and discovering their relationships.

Owns the process-wide shared state (lexicon, known-names registry and the
in-flight sets) and hands it to the extractors it drives. Batch operations
fan out over a thread pool and always return whatever succeeded, together
with an aggregate error for whatever did not.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from ..config import Settings, get_settings
from ..errors import HistoryGraphError, PartialBatchFailure
from ..extract.attributes import build_person
from ..extract.classifier import RelationshipClassifier
from ..extract.discovery import KnownNamesRegistry, RelationshipDiscovery
from ..extract.lexicon import RelationshipLexicon
from ..extract.ner import NameRecognizer
from ..fetch.client import FetchSource, WikipediaClient, subject_for_id
from ..models.people import Person, derive_id
from ..models.relationships import Classification, Connection, RelationshipType
from .inflight import InFlightSet

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class CrawlResult:
    """Outcome of scraping a batch of names and linking them up."""

    people: list[Person] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    failures: list[PartialBatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class HistoryCrawler:
    """Coordinates page fetches, attribute extraction and relationship discovery.

    Usage:
        with HistoryCrawler() as crawler:
            people, error = crawler.scrape_many(["Socrates", "Plato"])
            links, error = crawler.discover_relationships_many([p.id for p in people])
    """

    def __init__(
        self,
        source: FetchSource | None = None,
        settings: Settings | None = None,
        lexicon: RelationshipLexicon | None = None,
        registry: KnownNamesRegistry | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize the crawler.

        Args:
            source: Page source (a WikipediaClient is created if not provided)
            settings: Settings override
            lexicon: Shared relationship lexicon
            registry: Shared registry of known names
            sleep: Delay function used for the politeness throttle
        """
        self.settings = settings or get_settings()
        self._owns_source = source is None
        self.source = source or WikipediaClient(settings=self.settings)
        self.lexicon = lexicon or RelationshipLexicon()
        self.registry = registry or KnownNamesRegistry()
        self.scraping = InFlightSet()
        self.discovering = InFlightSet()
        self.classifier = RelationshipClassifier(self.lexicon)
        self.discovery = RelationshipDiscovery(self.registry)
        self.recognizer = NameRecognizer()
        self.sleep = sleep

    def __enter__(self) -> "HistoryCrawler":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_source and isinstance(self.source, WikipediaClient):
            self.source.close()

    # ------------------------------------------------------------------ #
    # Single operations
    # ------------------------------------------------------------------ #

    def scrape_one(self, name: str) -> Person:
        """Fetch a person's page and extract a Person record.

        The name joins the known-names registry once scraped.

        Raises:
            ConflictError: If the same person is already being scraped.
            FetchError: If the page cannot be retrieved or parsed.
        """
        with self.scraping.claim(derive_id(name)):
            doc = self.source.fetch(name)
            person = build_person(name, doc)
            self.registry.add(name)

        logger.info("Scraped %s (%s, %s)", person.name, person.profession, person.era)
        return person

    def discover_relationships(self, person_id: str) -> list[Connection]:
        """Connections from a person's page to every known person it mentions.

        Raises:
            ConflictError: If discovery for this id is already running.
            FetchError: If the page cannot be retrieved or parsed.
        """
        with self.discovering.claim(person_id):
            doc = self.source.fetch(subject_for_id(person_id))
            connections = self.discovery.discover(person_id, doc.content_text())

        logger.info("Discovered %d connections for %s", len(connections), person_id)
        return connections

    def extract_entities(self, text: str) -> list[str]:
        return self.recognizer.extract_entities(text)

    def classify_relationship(self, text: str, source: str, target: str) -> Classification:
        return self.classifier.classify(text, source, target)

    def learn(self, text: str, tag: str | RelationshipType) -> dict[str, int]:
        """Reinforce the lexicon with a text sample known to express `tag`.

        Raises:
            ValueError: If `tag` is not a lexicon relationship type.
        """
        rel_type = RelationshipType(tag)
        if rel_type not in self.lexicon.types:
            raise ValueError(f"No lexicon entries for relationship type {rel_type.value!r}")
        return self.lexicon.reinforce(text, rel_type)

    # ------------------------------------------------------------------ #
    # Batch operations
    # ------------------------------------------------------------------ #

    def scrape_many(self, names: list[str]) -> tuple[list[Person], PartialBatchFailure | None]:
        """Scrape several people concurrently; best-effort."""
        return self._run_batch(names, self.scrape_one, key=derive_id)

    def discover_relationships_many(
        self,
        person_ids: list[str],
    ) -> tuple[list[Connection], PartialBatchFailure | None]:
        """Discover relationships for several people concurrently; best-effort."""
        results, error = self._run_batch(person_ids, self.discover_relationships)
        return [conn for connections in results for conn in connections], error

    def crawl(self, names: list[str]) -> CrawlResult:
        """Scrape a batch of names, then link every person that succeeded."""
        result = CrawlResult()

        result.people, error = self.scrape_many(names)
        if error:
            result.failures.append(error)

        result.connections, error = self.discover_relationships_many(
            [person.id for person in result.people]
        )
        if error:
            result.failures.append(error)

        return result

    def _run_batch(
        self,
        items: list[T],
        work: Callable[[T], R],
        key: Callable[[T], str] = str,
    ) -> tuple[list[R], PartialBatchFailure | None]:
        """Run `work` for every item concurrently and wait for all of them.

        Items sharing a key are collapsed to their first occurrence. Each task
        sleeps for the throttle interval before working. Failures of any kind
        never cancel other tasks; they are collected and reported together.
        """
        unique: dict[str, T] = {}
        for item in items:
            unique.setdefault(key(item), item)
        if not unique:
            return [], None

        results: list[R] = []
        failures: list[tuple[str, Exception]] = []
        lock = threading.Lock()

        def task(item_key: str, item: T) -> None:
            try:
                self.sleep(self.settings.throttle_seconds)
                result = work(item)
            except HistoryGraphError as exc:
                logger.warning("Batch operation for %s failed: %s", item_key, exc)
                with lock:
                    failures.append((item_key, exc))
                return
            except Exception as exc:
                logger.exception("Unexpected error in batch operation for %s", item_key)
                with lock:
                    failures.append((item_key, exc))
                return
            with lock:
                results.append(result)

        workers = self.settings.max_workers or len(unique)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for item_key, item in unique.items():
                executor.submit(task, item_key, item)

        if failures:
            return results, PartialBatchFailure(failures, succeeded=len(results))
        return results, None
