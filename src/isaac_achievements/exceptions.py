"""
Custom exceptions for achievement extraction.

Each failure mode of a run has its own type so the service layer can turn it
into a structured result. Every run-level failure is safe to retry later.
"""


class AchievementsError(Exception):
    kind = "error"
    retryable = True


class FetchError(AchievementsError):
    kind = "fetch_failed"

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EmptyContentError(AchievementsError):
    kind = "empty_content"


class SchemaDriftError(AchievementsError):
    kind = "schema_drift"

    def __init__(self, count: int, minimum: int):
        self.count = count
        self.minimum = minimum
        super().__init__(
            f"Parsed {count} achievements, fewer than the expected {minimum}. "
            "The wiki layout may have changed. Please try again later."
        )


class HeuristicsError(AchievementsError):
    kind = "invalid_heuristics"
    retryable = False
