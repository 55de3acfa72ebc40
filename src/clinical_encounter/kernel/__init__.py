"""
Kernel - Core event sourcing infrastructure

The kernel provides the machinery every aggregate builds upon: the base
event model, the replay/record contract, identity generation, the store
port, and the ambient logging and metrics.

Fun fact: Event sourcing was inspired by accountants - they never erase ledger
entries, they add correcting entries. Hospital charts work the same way.
"""

from clinical_encounter.kernel.aggregate import INITIAL_VERSION, AggregateRoot, replay
from clinical_encounter.kernel.errors import (
    ClinicalEncounterError,
    EncounterNotInitialized,
    EventStoreError,
    InvariantViolation,
    StreamNotFound,
    StreamVersionConflict,
)
from clinical_encounter.kernel.event_store import EventStore, InMemoryEventStore
from clinical_encounter.kernel.events import DomainEvent
from clinical_encounter.kernel.ids import IdFactory, generate_id

__all__ = [
    # Aggregate contract
    "AggregateRoot",
    "INITIAL_VERSION",
    "replay",
    # Events
    "DomainEvent",
    # IDs
    "IdFactory",
    "generate_id",
    # Store
    "EventStore",
    "InMemoryEventStore",
    # Errors
    "ClinicalEncounterError",
    "InvariantViolation",
    "EncounterNotInitialized",
    "EventStoreError",
    "StreamVersionConflict",
    "StreamNotFound",
]
