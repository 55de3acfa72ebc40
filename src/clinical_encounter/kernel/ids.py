"""
Identity generation using UUIDv7 (time-ordered UUIDs)

Aggregates never mint their own identity. The application layer asks an
IdFactory for one and hands it to the aggregate's constructor.

Fun fact: There are 2^122 possible UUIDv7 values - you'd need to admit a
trillion patients per second for 85 years to have a 50% chance of two of
them sharing an encounter ID!
"""

import secrets
import time
from typing import Protocol
from uuid import UUID


class IdFactory(Protocol):
    """Protocol for ID generation strategies"""

    def generate(self) -> UUID:
        """Generate a new unique ID"""
        ...


def generate_id() -> UUID:
    """
    Generate a UUIDv7 identifier (time-ordered UUID)

    Layout (most significant bit first):
    - 48 bits: Unix timestamp in milliseconds
    - 4 bits: version (0111)
    - 12 bits: random
    - 2 bits: variant (10)
    - 62 bits: random

    Returns:
        Sortable UUID (e.g., UUID("01908e9a-3b87-7000-8000-123456789abc"))
    """
    timestamp_48 = int(time.time() * 1000) & 0xFFFFFFFFFFFF

    rand_12 = secrets.randbits(12)
    rand_62 = secrets.randbits(62)

    value = (timestamp_48 << 80) | (0x7 << 76) | (rand_12 << 64) | (0b10 << 62) | rand_62
    return UUID(int=value)


class DefaultIdFactory:
    """Default ID factory using UUIDv7 generation"""

    def generate(self) -> UUID:
        return generate_id()


# Global default factory
default_id_factory = DefaultIdFactory()
