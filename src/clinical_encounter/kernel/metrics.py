"""
Prometheus metrics collection for Clinical Encounter.

Counts what crosses the aggregate boundary: events persisted and replayed,
optimistic-locking conflicts, and command outcomes.
"""

from prometheus_client import Counter

# ============================================================================
# Event Store Metrics
# ============================================================================

events_appended_total = Counter(
    "clinical_encounter_events_appended_total",
    "Total number of events appended to the event store",
    ["event_type"],
)

events_loaded_total = Counter(
    "clinical_encounter_events_loaded_total",
    "Total number of events replayed from the event store",
)

stream_version_conflicts_total = Counter(
    "clinical_encounter_stream_version_conflicts_total",
    "Total number of optimistic locking version conflicts",
)

# ============================================================================
# Command Processing Metrics
# ============================================================================

commands_processed_total = Counter(
    "clinical_encounter_commands_processed_total",
    "Total number of encounter commands processed",
    ["command_type", "status"],  # status: accepted, rejected, failure
)
