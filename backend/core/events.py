# core/events.py: canonical event type definitions
# Cross-module communication uses these constants as event_type values.

# Gate events
GATE_STATE_CHANGED = "gate.state_changed"             # {status, token, url}

# Workshop record events
RECORD_ADDED = "workshop.record_added"                # {collection, record_id}
RECORD_DELETED = "workshop.record_deleted"            # {collection, record_ids}
DEMO_DATA_SEEDED = "workshop.demo_data_seeded"        # {collections}
