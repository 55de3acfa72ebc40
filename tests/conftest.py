"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Files named conftest.py are automatically discovered and their
fixtures are available to all tests in the same directory and subdirectories!
"""

from uuid import UUID

import pytest

from clinical_encounter.encounter.aggregate import Encounter
from clinical_encounter.encounter.repository import EncounterRepository
from clinical_encounter.kernel.event_store import InMemoryEventStore
from clinical_encounter.kernel.ids import generate_id


@pytest.fixture
def patient_id() -> UUID:
    """Provide a fresh patient identity, minted the way callers mint it"""
    return generate_id()


@pytest.fixture
def admitted_encounter(patient_id: UUID) -> Encounter:
    """
    Provide Fred Jones, 32, freshly admitted to ward 45

    Holds exactly one uncommitted PatientAdmitted event.
    """
    return Encounter.admit(patient_id, "Fred Jones", 32, 45)


@pytest.fixture
def discharged_encounter(admitted_encounter: Encounter) -> Encounter:
    """Provide the admitted encounter after a successful discharge"""
    assert admitted_encounter.discharge() is None
    return admitted_encounter


@pytest.fixture
def event_store() -> InMemoryEventStore:
    """Provide a fresh event store for each test"""
    return InMemoryEventStore()


@pytest.fixture
def repository(event_store: InMemoryEventStore) -> EncounterRepository:
    """Provide a repository over the fresh event store"""
    return EncounterRepository(event_store)
