"""
Event Store port and in-memory adapter

The durable event store is an external collaborator. This module pins
down the port the application layer talks to and ships an in-memory
adapter for development and tests. A database-backed store implements
the same protocol.

Rules every implementation follows:
- Append-only semantics (events never modified or deleted)
- Optimistic locking via stream versioning
- Atomicity (all events of one append land together or none do)
- Deterministic replay order (version order within a stream)
"""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from clinical_encounter.kernel.aggregate import INITIAL_VERSION
from clinical_encounter.kernel.errors import StreamVersionConflict
from clinical_encounter.kernel.events import DomainEvent
from clinical_encounter.kernel.logging import get_logger
from clinical_encounter.kernel.metrics import (
    events_appended_total,
    events_loaded_total,
    stream_version_conflicts_total,
)

logger = get_logger(__name__)


class EventStore(Protocol):
    """Port for event persistence"""

    def append(
        self,
        stream_id: UUID,
        expected_version: int,
        events: Sequence[DomainEvent],
    ) -> list[DomainEvent]:
        """
        Append events to a stream if its version still matches

        Raises:
            StreamVersionConflict: If the stream moved on since it was loaded
        """
        ...

    def load_stream(self, stream_id: UUID) -> list[DomainEvent]:
        """Load all events of a stream in version order (empty if unknown)"""
        ...

    def get_stream_version(self, stream_id: UUID) -> int:
        """Current stream version; INITIAL_VERSION if the stream has no events"""
        ...


class InMemoryEventStore:
    """
    In-memory event store with append-only semantics

    Streams are plain lists keyed by aggregate identity. The version of a
    stream is the zero-based position of its last event, which matches the
    version an aggregate reaches after applying the same events.
    """

    def __init__(self) -> None:
        self._streams: dict[UUID, list[DomainEvent]] = {}

    def append(
        self,
        stream_id: UUID,
        expected_version: int,
        events: Sequence[DomainEvent],
    ) -> list[DomainEvent]:
        """
        Append events to a stream with optimistic locking

        Args:
            stream_id: Aggregate identity
            expected_version: Stream version the caller loaded at
            events: Events to append, in order

        Returns:
            The appended events

        Raises:
            StreamVersionConflict: If stream version doesn't match expected
        """
        if not events:
            return []

        current_version = self.get_stream_version(stream_id)
        if current_version != expected_version:
            stream_version_conflicts_total.inc()
            logger.warning(
                "Stream version conflict",
                stream_id=str(stream_id),
                expected_version=expected_version,
                actual_version=current_version,
            )
            raise StreamVersionConflict(stream_id, expected_version, current_version)

        self._streams.setdefault(stream_id, []).extend(events)

        for event in events:
            events_appended_total.labels(event_type=type(event).__name__).inc()
        logger.debug(
            "Events appended",
            stream_id=str(stream_id),
            count=len(events),
            new_version=current_version + len(events),
        )
        return list(events)

    def load_stream(self, stream_id: UUID) -> list[DomainEvent]:
        events = list(self._streams.get(stream_id, []))
        events_loaded_total.inc(len(events))
        return events

    def get_stream_version(self, stream_id: UUID) -> int:
        return len(self._streams.get(stream_id, [])) + INITIAL_VERSION

    def count_events(self) -> int:
        """Get total number of events in store"""
        return sum(len(stream) for stream in self._streams.values())

    def count_streams(self) -> int:
        """Get total number of distinct streams"""
        return len(self._streams)
