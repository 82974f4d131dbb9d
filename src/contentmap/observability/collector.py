"""Resolution collector — records pipeline events into an EventLog.

Passed to the pagination accumulator, route resolver and pipeline driver.
Every component accepts ``collector=None`` and records nothing in that case.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from contentmap.observability.events import (
    ItemFetched,
    ItemSkipped,
    LocalesLoaded,
    LocaleSkipped,
    PageFetched,
    RouteResolved,
    RouteSkipped,
    SkipEvent,
    TemplateFailed,
    now_ns,
)
from contentmap.observability.log import EventLog


class ResolutionCollector:
    """Event collector for one or more resolution passes.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def begin_pass(self) -> int:
        """Open a new resolution pass; later events are tagged with it."""
        return self._log.begin_pass()

    def diagnostics(self, pass_id: int | None = None) -> list[SkipEvent]:
        """Skips and failures of one pass (default: the latest), oldest first."""
        if pass_id is None:
            pass_id = self._log.current_pass
        return self._log.skips(pass_id)  # type: ignore[return-value]

    # ----- Content source events -----

    def record_page(
        self,
        *,
        skip: int,
        items: int,
        total: int,
        duration_ms: float = 0.0,
    ) -> None:
        """Record one fetched page of a content query."""
        self._log.append(
            PageFetched(
                skip=skip,
                items=items,
                total=total,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_item(self, item_id: str, *, duration_ms: float = 0.0) -> None:
        """Record a single-item fetch."""
        self._log.append(
            ItemFetched(item_id=item_id, duration_ms=duration_ms, timestamp_ns=now_ns())
        )

    def record_locales(self, codes: tuple[str, ...], default: str | None) -> None:
        """Record the locale set loaded for a pass."""
        self._log.append(LocalesLoaded(codes=codes, default=default, timestamp_ns=now_ns()))

    # ----- Route events -----

    def record_resolved(self, source: str, *, count: int, duration_ms: float = 0.0) -> None:
        """Record the routes produced by one template."""
        self._log.append(
            RouteResolved(
                source=source,
                count=count,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_route_skipped(self, source: str, reason: str) -> None:
        """Record a pattern route dropped for missing parameters."""
        self._log.append(RouteSkipped(source=source, reason=reason, timestamp_ns=now_ns()))

    def record_item_skipped(self, source: str, position: int, reason: str) -> None:
        """Record a queried item excluded from its template."""
        self._log.append(
            ItemSkipped(
                source=source,
                position=position,
                reason=reason,
                timestamp_ns=now_ns(),
            )
        )

    def record_locale_skipped(self, source: str, locale: str, reason: str) -> None:
        """Record an alternate link that could not be built."""
        self._log.append(
            LocaleSkipped(source=source, locale=locale, reason=reason, timestamp_ns=now_ns())
        )

    def record_template_failed(self, source: str, error: str) -> None:
        """Record a template dropped from a lenient pass."""
        self._log.append(TemplateFailed(source=source, error=error, timestamp_ns=now_ns()))
