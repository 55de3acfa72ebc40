"""
Encounter Events - the closed set of facts about an admission episode

Named in past tense: each one is something that already happened to the
patient. Adding a variant means updating Encounter.apply as well, which
is the point of keeping the set closed.
"""

from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import Field, TypeAdapter

from clinical_encounter.kernel.events import DomainEvent


class PatientAdmitted(DomainEvent):
    """
    A patient was admitted to a ward - the encounter begins

    Always the first event of an encounter stream. Sets the identity.
    """

    event_type: Literal["PatientAdmitted"] = "PatientAdmitted"
    patient_id: UUID
    patient_name: str = Field(min_length=1)
    age_in_years: int = Field(ge=0)
    ward: int = Field(ge=0)


class PatientDischarged(DomainEvent):
    """The patient left care - the encounter ends"""

    event_type: Literal["PatientDischarged"] = "PatientDischarged"
    patient_id: UUID


class PatientTransferred(DomainEvent):
    """The patient moved to another ward while admitted"""

    event_type: Literal["PatientTransferred"] = "PatientTransferred"
    patient_id: UUID
    ward: int = Field(ge=0)


EncounterEvent = Annotated[
    PatientAdmitted | PatientDischarged | PatientTransferred,
    Field(discriminator="event_type"),
]

_encounter_event_adapter = TypeAdapter(EncounterEvent)


def event_to_payload(event: DomainEvent) -> dict[str, Any]:
    """
    Serialize an encounter event for an external store

    Returns:
        JSON-compatible dict including the event_type discriminator
    """
    return event.model_dump(mode="json")


def event_from_payload(payload: dict[str, Any]) -> EncounterEvent:
    """
    Parse a stored payload back into the matching event variant

    Raises:
        pydantic.ValidationError: Unknown event_type or malformed fields
    """
    return _encounter_event_adapter.validate_python(payload)
