"""Event sinks for counter notifications."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from photorecon.domain.ports import EventSink
    from photorecon.domain.reconciliation import CounterIntent

log = logging.getLogger(__name__)


class LoggingEventSink:
    """Logs every event and keeps running totals per counter name."""

    def __init__(self) -> None:
        self.totals: Counter[str] = Counter()

    def publish(self, name: str, data: Mapping[str, object]) -> None:
        count = data.get("count")
        if isinstance(count, int):
            self.totals[name] += count
        log.info("event: %s %s", name, dict(data))


def publish_counters(sink: EventSink | None, counters: Iterable[CounterIntent]) -> None:
    if sink is None:
        return
    for counter in counters:
        sink.publish(counter.name, counter.as_event())


if TYPE_CHECKING:
    _sink_check: EventSink = LoggingEventSink()
