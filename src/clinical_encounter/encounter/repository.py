"""
Encounter Repository - the caller side of the two-phase commit

The aggregate raises events locally; this layer persists them and only
then clears the aggregate's buffer. It is also where logging and metrics
happen, since the aggregate itself performs no I/O.

Flow for one command:
1. Load: replay the stream into a fresh Encounter
2. Decide: run the command against current derived state
3. Persist: append uncommitted events at the loaded version
4. Clear: empty the buffer once the store accepted the append
"""

from collections.abc import Callable
from uuid import UUID

from clinical_encounter.encounter.aggregate import Encounter
from clinical_encounter.encounter.errors import DomainError
from clinical_encounter.kernel.errors import StreamNotFound
from clinical_encounter.kernel.event_store import EventStore
from clinical_encounter.kernel.logging import LogOperation, get_logger
from clinical_encounter.kernel.metrics import commands_processed_total

logger = get_logger(__name__)

# A command runs against a loaded encounter and reports a rejection, if any
EncounterCommand = Callable[[Encounter], DomainError | None]


class EncounterRepository:
    """
    Loads and saves Encounter aggregates through an EventStore

    Not thread-safe per identity: callers must keep at most one command
    in flight for a given patient. Concurrent writers from elsewhere are
    caught by the store's version check.
    """

    def __init__(self, event_store: EventStore) -> None:
        self.event_store = event_store

    def load(self, patient_id: UUID) -> Encounter:
        """
        Rehydrate an encounter from its stream

        Raises:
            StreamNotFound: If the patient has no recorded events
        """
        with LogOperation(logger, "load_encounter", patient_id=str(patient_id)):
            events = self.event_store.load_stream(patient_id)
            if not events:
                raise StreamNotFound(patient_id)
            return Encounter.rehydrate(events)

    def save(self, encounter: Encounter) -> None:
        """
        Persist uncommitted events, then clear them

        On StreamVersionConflict the buffer is kept intact and the error
        propagates; the caller should reload and retry the command.
        """
        pending = encounter.uncommitted_events()
        if not pending:
            return

        with LogOperation(
            logger,
            "save_encounter",
            patient_id=str(encounter.identity()),
            expected_version=encounter.expected_version,
            event_count=len(pending),
        ):
            self.event_store.append(
                encounter.identity(),
                encounter.expected_version,
                pending,
            )
            encounter.clear_uncommitted_events()

    def execute(
        self,
        patient_id: UUID,
        command: EncounterCommand,
        command_type: str = "EncounterCommand",
    ) -> DomainError | None:
        """
        Load, run a command, and save if it was accepted

        Args:
            patient_id: Encounter to act on
            command: Callable invoking one Encounter command
            command_type: Label for logs and metrics (e.g., "DischargePatient")

        Returns:
            The command's DomainError if rejected, None if accepted and saved
        """
        try:
            encounter = self.load(patient_id)
            rejection = command(encounter)
            if rejection is not None:
                commands_processed_total.labels(
                    command_type=command_type, status="rejected"
                ).inc()
                logger.info(
                    "Command rejected",
                    command_type=command_type,
                    patient_id=str(patient_id),
                    reason=type(rejection).__name__,
                )
                return rejection

            self.save(encounter)
        except Exception:
            commands_processed_total.labels(
                command_type=command_type, status="failure"
            ).inc()
            raise

        commands_processed_total.labels(command_type=command_type, status="accepted").inc()
        return None
