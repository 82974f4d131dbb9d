"""Resolution log — per-pass event store for sitemap builds.

Events are tagged with the resolution pass that produced them, so one
collector can be shared by a long-lived ``ContentSitemap`` (for example
behind a live ``/sitemap.xml`` endpoint) and still answer "what was
skipped on the last build".

Fetch and resolve events are high volume: one ``PageFetched`` per page of
every query.  Skip diagnostics are kept in their own buffer with a separate
bound so a large listing cannot evict them before they are reported.

Thread Safety:
    All methods are protected by a ``threading.Lock``.

"""

import threading
from collections import deque
from typing import Any, NamedTuple

from contentmap.observability.events import SKIP_EVENT_TYPES, ResolutionEvent, RouteResolved


class LoggedEvent(NamedTuple):
    """An event with its append order and the pass it was recorded in."""

    seq: int
    pass_id: int
    event: ResolutionEvent


class EventLog:
    """Pass-aware event store with separate activity and skip buffers.

    Args:
        max_events: Activity events (fetches, resolved templates) retained.
        max_skips: Skip and failure events retained.

    """

    __slots__ = ("_activity", "_lock", "_pass_id", "_seq", "_skips")

    def __init__(self, max_events: int = 10_000, max_skips: int = 10_000) -> None:
        self._activity: deque[LoggedEvent] = deque(maxlen=max_events)
        self._skips: deque[LoggedEvent] = deque(maxlen=max_skips)
        self._pass_id = 0
        self._seq = 0
        self._lock = threading.Lock()

    @property
    def current_pass(self) -> int:
        """Id of the pass new events are tagged with (0 before any pass)."""
        with self._lock:
            return self._pass_id

    def begin_pass(self) -> int:
        """Start a new resolution pass and return its id."""
        with self._lock:
            self._pass_id += 1
            return self._pass_id

    def append(self, event: ResolutionEvent) -> None:
        """Record an event under the current pass."""
        with self._lock:
            self._seq += 1
            entry = LoggedEvent(self._seq, self._pass_id, event)
            if isinstance(event, SKIP_EVENT_TYPES):
                self._skips.append(entry)
            else:
                self._activity.append(entry)

    def query(
        self,
        *,
        event_type: type | tuple[type, ...] | None = None,
        source: str | None = None,
        pass_id: int | None = None,
        limit: int = 100,
    ) -> list[ResolutionEvent]:
        """Query events, most recent first.

        Args:
            event_type: Only events of this type (or types).
            source: Only events recorded for this template label.
            pass_id: Only events from this pass.
            limit: Maximum number of events to return.

        """
        with self._lock:
            entries = [*self._activity, *self._skips]

        entries.sort(key=lambda entry: entry.seq, reverse=True)
        results: list[ResolutionEvent] = []
        for entry in entries:
            if len(results) >= limit:
                break
            if pass_id is not None and entry.pass_id != pass_id:
                continue
            if event_type is not None and not isinstance(entry.event, event_type):
                continue
            if source is not None and getattr(entry.event, "source", None) != source:
                continue
            results.append(entry.event)
        return results

    def skips(self, pass_id: int | None = None) -> list[ResolutionEvent]:
        """Skip and failure events, oldest first, optionally for one pass."""
        with self._lock:
            entries = list(self._skips)
        return [e.event for e in entries if pass_id is None or e.pass_id == pass_id]

    def clear(self) -> int:
        """Drop all events and return how many were held.  Pass ids keep counting."""
        with self._lock:
            count = len(self._activity) + len(self._skips)
            self._activity.clear()
            self._skips.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._activity) + len(self._skips)

    def stats(self, pass_id: int | None = None) -> dict[str, Any]:
        """Event counts by type, and resolved routes per template."""
        with self._lock:
            entries = [*self._activity, *self._skips]
            passes = self._pass_id

        type_counts: dict[str, int] = {}
        routes: dict[str, int] = {}
        for entry in entries:
            if pass_id is not None and entry.pass_id != pass_id:
                continue
            event = entry.event
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1
            if isinstance(event, RouteResolved):
                routes[event.source] = routes.get(event.source, 0) + event.count

        return {
            "total": sum(type_counts.values()),
            "passes": passes,
            "by_type": type_counts,
            "routes_by_template": routes,
        }
