"""Concurrent orchestration of fetch, extraction and discovery."""

from .inflight import InFlightSet
from .orchestrator import CrawlResult, HistoryCrawler

__all__ = ["InFlightSet", "CrawlResult", "HistoryCrawler"]
