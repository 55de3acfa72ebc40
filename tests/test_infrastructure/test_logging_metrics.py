"""
Test infrastructure components: logging and metrics.

These tests verify the observability around the aggregate works and keeps
patient data out of the logs.
"""

from uuid import UUID

import pytest
import structlog
from prometheus_client import REGISTRY
from structlog.testing import capture_logs

from clinical_encounter.encounter.aggregate import Encounter
from clinical_encounter.encounter.repository import EncounterRepository
from clinical_encounter.kernel.errors import StreamVersionConflict
from clinical_encounter.kernel.logging import (
    LogOperation,
    configure_logging,
    get_correlation_id,
    get_logger,
    is_production,
    redact_context,
    set_correlation_id,
)


def _sample(name: str, **labels: str) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


class TestLoggingFramework:
    """Test structured logging framework."""

    def test_configure_logging_console(self) -> None:
        """Test console output ends in the human-readable renderer."""
        configure_logging(json_output=False, log_level="INFO")

        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_configure_logging_json(self) -> None:
        """Test JSON output ends in the JSON renderer."""
        configure_logging(json_output=True, log_level="DEBUG")

        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_configure_logging_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults come from ENVIRONMENT and LOG_LEVEL."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert is_production() is True
        configure_logging()

        renderer = structlog.get_config()["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_is_production_defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        assert is_production() is False

    def test_correlation_id(self) -> None:
        """Test correlation ID context management."""
        cid = get_correlation_id()
        assert len(cid) > 0

        set_correlation_id("ward-round-45")
        assert get_correlation_id() == "ward-round-45"

    def test_redact_context_hides_patient_details(self) -> None:
        redacted = redact_context(
            {"patient_name": "Fred Jones", "age_in_years": 32, "ward": 45}
        )

        assert redacted == {
            "patient_name": "***REDACTED***",
            "age_in_years": "***REDACTED***",
            "ward": 45,
        }

    def test_log_operation_redacts_patient_details(self) -> None:
        """Test LogOperation lines carry the operation but not the patient's name."""
        configure_logging(json_output=True, log_level="DEBUG")

        with capture_logs() as logs:
            with LogOperation(
                get_logger(__name__), "admit_patient", patient_name="Fred Jones", ward=45
            ):
                pass

        completed = [entry for entry in logs if entry["event"] == "admit_patient completed"]
        assert len(completed) == 1
        assert completed[0]["patient_name"] == "***REDACTED***"
        assert completed[0]["ward"] == 45
        assert "duration_ms" in completed[0]
        assert all("Fred Jones" not in str(entry.values()) for entry in logs)

    def test_log_operation_with_exception(self) -> None:
        """Test LogOperation logs errors and re-raises."""
        configure_logging(json_output=True, log_level="INFO")

        with capture_logs() as logs:
            with pytest.raises(ValueError):
                with LogOperation(get_logger(__name__), "failing_operation"):
                    raise ValueError("Test error")

        failed = [entry for entry in logs if entry["event"] == "failing_operation failed"]
        assert len(failed) == 1
        assert failed[0]["log_level"] == "error"
        assert failed[0]["error"] == "Test error"


class TestRepositoryMetrics:
    """Test command and store counters move with repository activity."""

    def test_accepted_and_rejected_commands_are_counted(
        self,
        repository: EncounterRepository,
        admitted_encounter: Encounter,
        patient_id: UUID,
    ) -> None:
        accepted_before = _sample(
            "clinical_encounter_commands_processed_total",
            command_type="DischargePatient",
            status="accepted",
        )
        rejected_before = _sample(
            "clinical_encounter_commands_processed_total",
            command_type="DischargePatient",
            status="rejected",
        )
        repository.save(admitted_encounter)

        repository.execute(patient_id, lambda e: e.discharge(), "DischargePatient")
        repository.execute(patient_id, lambda e: e.discharge(), "DischargePatient")

        assert _sample(
            "clinical_encounter_commands_processed_total",
            command_type="DischargePatient",
            status="accepted",
        ) == accepted_before + 1
        assert _sample(
            "clinical_encounter_commands_processed_total",
            command_type="DischargePatient",
            status="rejected",
        ) == rejected_before + 1

    def test_appended_events_are_counted(
        self,
        repository: EncounterRepository,
        admitted_encounter: Encounter,
    ) -> None:
        before = _sample("clinical_encounter_events_appended_total", event_type="PatientAdmitted")

        repository.save(admitted_encounter)

        assert _sample(
            "clinical_encounter_events_appended_total", event_type="PatientAdmitted"
        ) == before + 1

    def test_version_conflicts_are_counted(
        self,
        repository: EncounterRepository,
        admitted_encounter: Encounter,
        patient_id: UUID,
    ) -> None:
        repository.save(admitted_encounter)
        stale = repository.load(patient_id)
        repository.execute(patient_id, lambda e: e.transfer(22), "TransferPatient")
        before = _sample("clinical_encounter_stream_version_conflicts_total")

        stale.transfer(9)
        with pytest.raises(StreamVersionConflict):
            repository.save(stale)

        assert _sample("clinical_encounter_stream_version_conflicts_total") == before + 1
