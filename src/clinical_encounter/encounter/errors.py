"""
Encounter Domain Errors - recoverable business rejections

These are values, not exceptions. A command that cannot be honoured
returns one of them and leaves the aggregate exactly as it was; callers
branch on the result like any other business outcome (for example to
show the user a message).
"""

from abc import abstractmethod
from uuid import UUID

from pydantic import BaseModel, Field


class DomainError(BaseModel):
    """Base for rejected-command results"""

    patient_id: UUID

    model_config = {"frozen": True}

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable reason the command was refused"""

    def __str__(self) -> str:
        return self.message


class AlreadyDischarged(DomainError):
    """Discharge was requested for a patient who is no longer admitted"""

    @property
    def message(self) -> str:
        return (
            f"Unable to discharge patient with id {self.patient_id}.  "
            "This patient is not currently admitted"
        )


class TransferOfDischargedPatient(DomainError):
    """Transfer was requested for a patient who is no longer admitted"""

    ward: int = Field(ge=0)

    @property
    def message(self) -> str:
        return (
            f"Unable to transfer patient with id {self.patient_id} to ward {self.ward}.  "
            "This patient is not currently admitted"
        )
