"""
Custom exceptions for Clinical Encounter

Exceptions here are reserved for faults: contract misuse and store
failures. Business rejections (a discharge of a discharged patient, say)
are ordinary values returned by commands and live in
clinical_encounter.encounter.errors instead.

Fun fact: Florence Nightingale kept meticulous ward records during the
Crimean War and used them to prove that sanitation, not battle wounds,
was killing most soldiers. Good logs change outcomes!
"""


class ClinicalEncounterError(Exception):
    """Base exception for all Clinical Encounter errors"""

    pass


class InvariantViolation(ClinicalEncounterError):
    """
    Raised when the aggregate contract is misused

    These are programming errors, not domain facts. No caller should
    ever legitimately reach them, so they are never caught inside the
    library.
    """

    pass


class EncounterNotInitialized(InvariantViolation):
    """Raised when an operation needs an admitted identity but no event was applied"""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"Encounter not initialized: cannot {operation} before a "
            "PatientAdmitted event has been applied"
        )


class EventStoreError(ClinicalEncounterError):
    """Base class for event store errors"""

    pass


class StreamVersionConflict(EventStoreError):
    """
    Raised when stream version doesn't match expected (optimistic locking)

    Indicates concurrent modification - caller should reload and retry.
    """

    def __init__(
        self, stream_id: object, expected_version: int, actual_version: int
    ) -> None:
        self.stream_id = stream_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Stream {stream_id} version mismatch: "
            f"expected {expected_version}, got {actual_version}"
        )


class StreamNotFound(EventStoreError):
    """Raised when loading a stream that has no events"""

    def __init__(self, stream_id: object) -> None:
        self.stream_id = stream_id
        super().__init__(f"Stream {stream_id} not found")
