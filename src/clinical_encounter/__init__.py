"""
Clinical Encounter - Event-sourced admission episodes

Models a patient's admission, transfers and discharge as an append-only
log of domain events. State is derived by replaying that log, never
stored and mutated directly.
"""

from clinical_encounter.encounter import Encounter, EncounterRepository

__version__ = "0.1.0"
__all__ = ["Encounter", "EncounterRepository", "__version__"]
