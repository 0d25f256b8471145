"""Anonymization Layer — pseudonymous labels and one-way real-name suppression.

Invariants:
    - While unsuppressed, pseudonym_for(id) is deterministic: same id, same label
    - After suppress(), every label is positional ("Node-01", "Node-02", ...) by the
      node's current enumeration position, and no real name is retrievable
    - Suppression is one-way for the registry's lifetime; only reset() (new session)
      clears it

Design Decisions:
    - 32-bit rolling string hash (h * 31 + code, wrapped to signed int32): stable across
      processes, unlike the built-in hash() which is salted per interpreter
    - Real names live only here; the roster stores ids and asks the registry for names
"""

import logging

from collective_embedding.core.domain_types import ParticipantId
from collective_embedding.core.graph_store import GraphStore

logger = logging.getLogger(__name__)

PSEUDONYM_STEMS: tuple[str, ...] = (
    "Alpha", "Beta", "Gamma", "Delta", "Sigma", "Theta", "Lambda", "Omega",
)


def label_hash(value: str) -> int:
    """Signed 32-bit rolling hash of value."""
    h = 0
    for ch in value:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def pseudonym_for(node_id: str) -> str:
    magnitude = abs(label_hash(node_id))
    stem = PSEUDONYM_STEMS[magnitude % len(PSEUDONYM_STEMS)]
    return f"{stem}-{magnitude % 100:02d}"


def positional_label(position: int) -> str:
    """Label for a zero-based enumeration position."""
    return f"Node-{position + 1:02d}"


class IdentityRegistry:
    """Holds the id -> real-name map until suppression discards it."""

    def __init__(self) -> None:
        self._names: dict[ParticipantId, str] = {}
        self.suppressed: bool = False

    def record(self, participant_id: ParticipantId, name: str) -> None:
        if self.suppressed:
            return
        self._names[participant_id] = name

    def real_name(self, participant_id: ParticipantId) -> str | None:
        if self.suppressed:
            return None
        return self._names.get(participant_id)

    def suppress(self) -> bool:
        """Discard every real name. Returns False if already suppressed."""
        if self.suppressed:
            return False
        discarded = len(self._names)
        self._names.clear()
        self.suppressed = True
        logger.info(f"Identity suppressed: {discarded} name(s) discarded")
        return True

    def label_for(self, node_id: ParticipantId, store: GraphStore) -> str:
        if not self.suppressed:
            return pseudonym_for(node_id)
        position = store.position_of(node_id)
        if position is None:
            return positional_label(-1)
        return positional_label(position)

    def display_name(self, participant_id: ParticipantId, store: GraphStore) -> str:
        """Real name while known, otherwise the node's label."""
        return self.real_name(participant_id) or self.label_for(participant_id, store)

    def reset(self) -> None:
        self._names.clear()
        self.suppressed = False
