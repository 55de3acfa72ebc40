"""
Aggregate Root contract - replay/record protocol

An aggregate is a consistency boundary whose state is derived entirely
from its own event history. Every concrete aggregate satisfies this
capability set; there is no shared base class holding mutable fields.

Two ways for an event to reach an aggregate:
- apply: pure state transition, used for replay (nothing recorded)
- raise_event: apply, then remember the event as not yet persisted

Replay consistency: rebuilding from history with apply and then raising
one more event must land on exactly the state that applying the whole
sequence would.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar
from uuid import UUID

EventT = TypeVar("EventT")
AggregateT = TypeVar("AggregateT", bound="AggregateRoot")

# Version of an aggregate (or a stream) that has seen no events
INITIAL_VERSION = -1


class AggregateRoot(Protocol[EventT]):
    """Protocol every event-sourced aggregate implements"""

    def identity(self) -> UUID:
        """Unique key of the aggregate; fatal before any event was applied"""
        ...

    def current_version(self) -> int:
        """Version counter for optimistic-concurrency checks by the store"""
        ...

    def uncommitted_events(self) -> Sequence[EventT]:
        """Read-only view of events raised since construction or last clear"""
        ...

    def clear_uncommitted_events(self) -> None:
        """Empty the uncommitted buffer without touching derived state"""
        ...

    def apply(self, event: EventT) -> None:
        """Deterministically advance derived state by one event"""
        ...

    def raise_event(self, event: EventT) -> None:
        """Apply the event and append it to the uncommitted buffer"""
        ...


def replay(aggregate: AggregateT, events: Iterable[EventT]) -> AggregateT:
    """
    Rebuild an aggregate by applying its history in log order

    Args:
        aggregate: Freshly constructed (uninitialized) aggregate
        events: Previously persisted events for one identity

    Returns:
        The same aggregate, now holding the derived state. Nothing is
        added to its uncommitted buffer.
    """
    for event in events:
        aggregate.apply(event)
    return aggregate
