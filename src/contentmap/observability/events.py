"""Resolution event model.

Every remote fetch and every skipped or emitted route is described by a
frozen dataclass event with a monotonic ``timestamp_ns``.  Skips are not
errors: they are recorded here as diagnostics instead of being raised.

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Content source events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PageFetched:
    """One page of a paginated content query was fetched.

    Attributes:
        skip: Offset requested for this page.
        items: Number of items returned.
        total: Total reported by the source.
        duration_ms: Time spent waiting on the source.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    skip: int
    items: int
    total: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ItemFetched:
    """A single content item was fetched by id."""

    item_id: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class LocalesLoaded:
    """The locale list was loaded from the content source.

    Attributes:
        codes: Locale codes in source order.
        default: Default locale in effect for the pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    codes: tuple[str, ...]
    default: str | None
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Route resolution events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RouteResolved:
    """A route template produced its resolved routes.

    Attributes:
        source: Template pattern or static URL.
        count: Number of resolved routes emitted.
        duration_ms: Time taken to resolve the template.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    count: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RouteSkipped:
    """A pattern route could not be built from its default parameters."""

    source: str
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ItemSkipped:
    """A queried content item could not satisfy its route template.

    Attributes:
        source: Template pattern.
        position: Index of the item in the accumulated listing.
        reason: Why the item was excluded.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    source: str
    position: int
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class LocaleSkipped:
    """An alternate-language link could not be built for one locale."""

    source: str
    locale: str
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class TemplateFailed:
    """A template was dropped from a lenient pass after a source failure."""

    source: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type ResolutionEvent = (
    PageFetched
    | ItemFetched
    | LocalesLoaded
    | RouteResolved
    | RouteSkipped
    | ItemSkipped
    | LocaleSkipped
    | TemplateFailed
)

type SkipEvent = RouteSkipped | ItemSkipped | LocaleSkipped | TemplateFailed

SKIP_EVENT_TYPES = (RouteSkipped, ItemSkipped, LocaleSkipped, TemplateFailed)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
