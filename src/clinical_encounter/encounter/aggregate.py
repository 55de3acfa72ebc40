"""
Encounter Aggregate - event-sourced state machine for one admission

State is never set directly. Commands validate against the current
derived state, raise an event, and the event's apply handler moves the
state forward. Replaying the same events through apply alone lands on
the same state, which is what makes rehydration from a store valid.

    UNINITIALIZED --admit--> ADMITTED --discharge--> DISCHARGED
                               |   ^
                               +---+ transfer

Fun fact: "Ward" comes from Old English weard, a guard or watchman -
the ward was where patients were watched over through the night.
"""

from collections.abc import Iterable
from enum import Enum
from uuid import UUID

from pydantic import BaseModel

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
)
from clinical_encounter.kernel.aggregate import INITIAL_VERSION, replay
from clinical_encounter.kernel.errors import EncounterNotInitialized, InvariantViolation


class AdmissionStatus(str, Enum):
    """
    Encounter lifecycle states

    UNINITIALIZED → ADMITTED → DISCHARGED, never backwards.
    """

    UNINITIALIZED = "UNINITIALIZED"  # No event applied yet
    ADMITTED = "ADMITTED"  # In care, may be transferred or discharged
    DISCHARGED = "DISCHARGED"  # Left care, rejects further clinical commands


class EncounterState(BaseModel):
    """Immutable snapshot of everything an Encounter derives from its events"""

    patient_id: UUID | None
    patient_name: str | None
    age_in_years: int | None
    ward: int | None
    status: AdmissionStatus
    version: int

    model_config = {"frozen": True}


class Encounter:
    """
    Aggregate root for a single clinical encounter

    Implements the AggregateRoot contract over EncounterEvent. Instances
    are single-threaded values: callers serialize access per identity
    and rely on the version for optimistic concurrency against the store.
    """

    def __init__(self) -> None:
        """Create an uninitialized encounter, ready for replay"""
        self._patient_id: UUID | None = None
        self._patient_name: str | None = None
        self._age_in_years: int | None = None
        self._ward: int | None = None
        self._status = AdmissionStatus.UNINITIALIZED
        self._version = INITIAL_VERSION
        self._uncommitted: list[EncounterEvent] = []

    @classmethod
    def admit(
        cls,
        patient_id: UUID,
        patient_name: str,
        age_in_years: int,
        ward: int,
    ) -> "Encounter":
        """
        Start a new encounter by admitting a patient

        Args:
            patient_id: Identity minted by the caller (see kernel.ids)
            patient_name: Patient's display name
            age_in_years: Age at admission
            ward: Ward number the patient is admitted to

        Returns:
            Admitted encounter holding one uncommitted PatientAdmitted event

        Raises:
            pydantic.ValidationError: If the admission fields are invalid
        """
        encounter = cls()
        encounter.raise_event(
            PatientAdmitted(
                patient_id=patient_id,
                patient_name=patient_name,
                age_in_years=age_in_years,
                ward=ward,
            )
        )
        return encounter

    @classmethod
    def rehydrate(cls, events: Iterable[EncounterEvent]) -> "Encounter":
        """Rebuild an encounter from its persisted history (nothing recorded)"""
        return replay(cls(), events)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def patient_id(self) -> UUID | None:
        return self._patient_id

    @property
    def patient_name(self) -> str | None:
        return self._patient_name

    @property
    def age_in_years(self) -> int | None:
        return self._age_in_years

    @property
    def ward(self) -> int | None:
        return self._ward

    @property
    def status(self) -> AdmissionStatus:
        return self._status

    @property
    def currently_admitted(self) -> bool | None:
        """None before admission, True while admitted, False once discharged"""
        if self._status is AdmissionStatus.UNINITIALIZED:
            return None
        return self._status is AdmissionStatus.ADMITTED

    @property
    def expected_version(self) -> int:
        """Version the encounter was loaded at, for the store's conflict check"""
        return self._version - len(self._uncommitted)

    def state(self) -> EncounterState:
        return EncounterState(
            patient_id=self._patient_id,
            patient_name=self._patient_name,
            age_in_years=self._age_in_years,
            ward=self._ward,
            status=self._status,
            version=self._version,
        )

    # ------------------------------------------------------------------
    # AggregateRoot contract
    # ------------------------------------------------------------------

    def identity(self) -> UUID:
        """
        Get the encounter's unique key

        Raises:
            EncounterNotInitialized: If no event has been applied yet
        """
        if self._patient_id is None:
            raise EncounterNotInitialized("read identity")
        return self._patient_id

    def current_version(self) -> int:
        return self._version

    def uncommitted_events(self) -> tuple[EncounterEvent, ...]:
        return tuple(self._uncommitted)

    def clear_uncommitted_events(self) -> None:
        self._uncommitted.clear()

    def apply(self, event: EncounterEvent) -> None:
        """
        Advance derived state by one event

        Validation happens before any field changes, so an event that
        cannot be applied leaves the encounter untouched.

        Raises:
            EncounterNotInitialized: Follow-up event before PatientAdmitted
            InvariantViolation: Second admission, foreign patient_id, or an
                event outside the encounter's closed set
        """
        if isinstance(event, PatientAdmitted):
            self._when_patient_admitted(event)
        elif isinstance(event, PatientDischarged):
            self._check_same_patient(event.patient_id, "apply PatientDischarged")
            self._status = AdmissionStatus.DISCHARGED
        elif isinstance(event, PatientTransferred):
            self._check_same_patient(event.patient_id, "apply PatientTransferred")
            self._ward = event.ward
        else:
            raise InvariantViolation(
                f"Encounter cannot apply unknown event {type(event).__name__}"
            )
        self._version += 1

    def raise_event(self, event: EncounterEvent) -> None:
        """
        Apply the event and record it as uncommitted

        No business rules are checked here: discharge and transfer are the
        validated entry points. Raising an event directly is accepted
        whenever apply accepts it, so raise and replay always agree.
        """
        self.apply(event)
        self._uncommitted.append(event)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def discharge(self) -> DomainError | None:
        """
        Discharge the patient

        Returns:
            None if PatientDischarged was raised, AlreadyDischarged otherwise

        Raises:
            EncounterNotInitialized: If the encounter was never admitted
        """
        patient_id = self._require_admission("discharge")
        if self._status is AdmissionStatus.DISCHARGED:
            return AlreadyDischarged(patient_id=patient_id)

        self.raise_event(PatientDischarged(patient_id=patient_id))
        return None

    def transfer(self, ward: int) -> DomainError | None:
        """
        Move the patient to another ward

        Args:
            ward: Target ward number

        Returns:
            None if PatientTransferred was raised, TransferOfDischargedPatient otherwise

        Raises:
            EncounterNotInitialized: If the encounter was never admitted
        """
        patient_id = self._require_admission("transfer")
        if self._status is AdmissionStatus.DISCHARGED:
            return TransferOfDischargedPatient(patient_id=patient_id, ward=ward)

        self.raise_event(PatientTransferred(patient_id=patient_id, ward=ward))
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_admission(self, operation: str) -> UUID:
        if self._patient_id is None:
            raise EncounterNotInitialized(operation)
        return self._patient_id

    def _check_same_patient(self, patient_id: UUID, operation: str) -> None:
        own_id = self._require_admission(operation)
        if patient_id != own_id:
            raise InvariantViolation(
                f"Event for patient {patient_id} applied to encounter of patient {own_id}"
            )

    def _when_patient_admitted(self, event: PatientAdmitted) -> None:
        if self._patient_id is not None:
            raise InvariantViolation(
                f"Encounter for patient {self._patient_id} is already admitted"
            )
        self._patient_id = event.patient_id
        self._patient_name = event.patient_name
        self._age_in_years = event.age_in_years
        self._ward = event.ward
        self._status = AdmissionStatus.ADMITTED
