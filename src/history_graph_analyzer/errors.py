"""Exception hierarchy for the extraction pipeline."""


class HistoryGraphError(Exception):
    """Base class for all pipeline errors."""


class FetchError(HistoryGraphError):
    """A page could not be retrieved (network failure, timeout, bad status)."""

    def __init__(self, message: str, subject: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.subject = subject
        self.status_code = status_code


class ParseError(FetchError):
    """A page was retrieved but its markup could not be used."""


class ConflictError(HistoryGraphError):
    """The same subject is already being processed."""

    def __init__(self, key: str):
        super().__init__(f"Already processing {key!r}")
        self.key = key


class PartialBatchFailure(HistoryGraphError):
    """Some items of a batch failed; the successful results are still returned."""

    def __init__(self, failures: list[tuple[str, Exception]], succeeded: int):
        self.failures = failures
        self.succeeded = succeeded
        keys = ", ".join(key for key, _ in failures)
        super().__init__(
            f"{len(failures)} of {len(failures) + succeeded} batch operations failed: {keys}"
        )

    @property
    def keys(self) -> list[str]:
        """Keys of the items that failed."""
        return [key for key, _ in self.failures]
