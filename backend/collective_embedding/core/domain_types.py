"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Exactly four channels, fixed at import time, never added or renamed at runtime
    - ParticipantId is an opaque uuid4 string generated at join time
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (event payloads, REST bodies)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SessionId = NewType("SessionId", str)
ParticipantId = NewType("ParticipantId", str)
ConnectionId = NewType("ConnectionId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Channel(str, Enum):
    """The four influence channels a question can nominate along."""
    COGNITIVE = "cognitive"
    CREATIVE = "creative"
    TECHNICAL = "technical"
    SOCIAL = "social"


class NodeRole(str, Enum):
    """Structural role derived from centrality (see core.roles)."""
    BRIDGE = "Bridge"
    INITIATOR = "Initiator"
    AMPLIFIER = "Amplifier"
    CONNECTOR = "Connector"
    STABILIZER = "Stabilizer"


class SessionPhase(str, Enum):
    """Session lifecycle as observed from outside the engine."""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    PAUSED = "paused"


# ─── Limits ──────────────────────────────────────────────────────

DEFAULT_MAX_PARTICIPANTS: int = 20
DEFAULT_AUTO_ADVANCE_DELAY_SECONDS: float = 5.0
NOT_STARTED: int = -1  # question cursor before the first question
