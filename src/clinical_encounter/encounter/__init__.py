"""
Encounter Module - event-sourced lifecycle of one admission episode

A patient is admitted, may be transferred between wards, and is
eventually discharged. Every change is an event; the Encounter aggregate
derives its state from them and refuses commands that no longer make
sense for that state.
"""

from clinical_encounter.encounter.aggregate import AdmissionStatus, Encounter, EncounterState
from clinical_encounter.encounter.errors import (
    AlreadyDischarged,
    DomainError,
    TransferOfDischargedPatient,
)
from clinical_encounter.encounter.events import (
    EncounterEvent,
    PatientAdmitted,
    PatientDischarged,
    PatientTransferred,
    event_from_payload,
    event_to_payload,
)
from clinical_encounter.encounter.repository import EncounterRepository

__all__ = [
    # Aggregate
    "Encounter",
    "EncounterState",
    "AdmissionStatus",
    # Events
    "EncounterEvent",
    "PatientAdmitted",
    "PatientDischarged",
    "PatientTransferred",
    "event_to_payload",
    "event_from_payload",
    # Domain errors
    "DomainError",
    "AlreadyDischarged",
    "TransferOfDischargedPatient",
    # Persistence
    "EncounterRepository",
]
