"""
Base DomainEvent model for event sourcing

Events are immutable facts about what already happened to an aggregate.
The ordered log of them is the only source of truth; every piece of
aggregate state is derived by replaying it.

Fun fact: In event sourcing, the event log is like a patient chart -
you never erase an entry, you append a correction. Replay the chart
and you know exactly where the patient stood at any moment!
"""

from pydantic import BaseModel


class DomainEvent(BaseModel):
    """
    Base class for all domain events

    Events are:
    - Immutable (frozen, never modified after creation)
    - Structurally comparable (field-wise equality, hashable)
    - Behavior-free (pure data, interpreted only by aggregates)
    - Serializable (JSON-mode model_dump for an external store)

    Concrete events add their own fields plus an ``event_type``
    discriminator so a closed union of them can be parsed back.
    """

    model_config = {
        "frozen": True,  # Events are immutable
        "extra": "forbid",
    }
