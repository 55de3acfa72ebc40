"""
Replay consistency tests

An encounter rebuilt from its events must be indistinguishable from the
live encounter that raised them, and a command issued after rehydration
must land where straight event application would.

Fun fact: Event sourcing tests are like archaeology - we're verifying
that the historical record is complete, immutable, and replayable!
"""

from uuid import UUID

import pytest

from clinical_encounter.encounter.aggregate import Encounter
from clinical_encounter.encounter.events import PatientTransferred
from clinical_encounter.kernel.aggregate import replay

COMMAND_SEQUENCES = {
    "admit_only": [],
    "discharge": [lambda e: e.discharge()],
    "transfer": [lambda e: e.transfer(22)],
    "transfer_then_discharge": [lambda e: e.transfer(22), lambda e: e.discharge()],
    "many_transfers": [lambda e, ward=ward: e.transfer(ward) for ward in (1, 2, 3, 2, 9)],
    "rejections_interleaved": [
        lambda e: e.discharge(),
        lambda e: e.discharge(),
        lambda e: e.transfer(5),
    ],
}


@pytest.mark.parametrize(
    "commands", list(COMMAND_SEQUENCES.values()), ids=list(COMMAND_SEQUENCES)
)
def test_rehydrated_state_matches_live_state(patient_id: UUID, commands) -> None:
    """Test applying the raised events from scratch reproduces the live state"""
    live = Encounter.admit(patient_id, "Fred Jones", 32, 45)
    for command in commands:
        command(live)

    rebuilt = Encounter.rehydrate(live.uncommitted_events())

    assert rebuilt.state() == live.state()
    assert rebuilt.uncommitted_events() == ()


def test_replay_then_raise_matches_apply_only(patient_id: UUID) -> None:
    """Test history + one raised event equals applying history + event directly"""
    history = Encounter.admit(patient_id, "Fred Jones", 32, 45)
    history.transfer(22)
    persisted = history.uncommitted_events()

    resumed = Encounter.rehydrate(persisted)
    assert resumed.transfer(30) is None
    new_events = resumed.uncommitted_events()

    reference = Encounter.rehydrate([*persisted, *new_events])

    assert new_events == (PatientTransferred(patient_id=patient_id, ward=30),)
    assert resumed.state() == reference.state()
    assert resumed.expected_version == history.current_version()


def test_commands_after_rehydration_use_derived_state(discharged_encounter: Encounter) -> None:
    """Test a rehydrated discharged encounter still refuses clinical commands"""
    rebuilt = Encounter.rehydrate(discharged_encounter.uncommitted_events())

    assert rebuilt.discharge() is not None
    assert rebuilt.transfer(22) is not None
    assert rebuilt.uncommitted_events() == ()


def test_replay_is_deterministic(admitted_encounter: Encounter) -> None:
    """Test two independent replays of the same log agree"""
    admitted_encounter.transfer(22)
    admitted_encounter.discharge()
    events = admitted_encounter.uncommitted_events()

    first = replay(Encounter(), events)
    second = replay(Encounter(), events)

    assert first.state() == second.state()


def test_replay_of_empty_history_stays_uninitialized() -> None:
    """Test replaying nothing leaves the encounter fresh"""
    assert Encounter.rehydrate([]).state() == Encounter().state()
