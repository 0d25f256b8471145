"""Anonymization Layer — tests for pseudonyms and one-way suppression.

Tests cover:
    - Rolling hash values and signed 32-bit wrapping
    - Deterministic pseudonym format while unsuppressed
    - Positional labels and discarded names after suppression
    - Suppression is one-way; only reset() clears it
"""

import re

from collective_embedding.core.anonymize import (
    IdentityRegistry, label_hash, positional_label, pseudonym_for,
)
from collective_embedding.core.graph_store import GraphStore

_PSEUDONYM = re.compile(r"^(Alpha|Beta|Gamma|Delta|Sigma|Theta|Lambda|Omega)-\d{2}$")


def _store(*node_ids) -> GraphStore:
    store = GraphStore()
    for node_id in node_ids:
        store.add_node(node_id)
    return store


# ─── hashing ─────────────────────────────────────────────────────

def test_label_hash_known_values():
    assert label_hash("") == 0
    assert label_hash("a") == 97
    assert label_hash("ab") == 97 * 31 + 98


def test_label_hash_wraps_to_signed_32_bit():
    value = label_hash("f47ac10b-58cc-4372-a567-0e02b2c3d479" * 4)
    assert -(2 ** 31) <= value < 2 ** 31


def test_pseudonym_from_hash():
    assert pseudonym_for("a") == "Beta-97"
    assert pseudonym_for("ab") == "Beta-05"


def test_pseudonym_is_deterministic_and_well_formed():
    node_id = "3b241101-e2bb-4255-8caf-4136c566a962"
    assert pseudonym_for(node_id) == pseudonym_for(node_id)
    assert _PSEUDONYM.match(pseudonym_for(node_id))


# ─── IdentityRegistry ────────────────────────────────────────────

def test_unsuppressed_label_is_pseudonym():
    registry = IdentityRegistry()
    store = _store("n1")
    assert registry.label_for("n1", store) == pseudonym_for("n1")


def test_real_name_available_until_suppressed():
    registry = IdentityRegistry()
    registry.record("n1", "Ada")
    assert registry.real_name("n1") == "Ada"
    assert registry.suppress() is True
    assert registry.real_name("n1") is None


def test_suppressed_labels_are_positional():
    registry = IdentityRegistry()
    store = _store("n1", "n2", "n3")
    registry.suppress()
    assert [registry.label_for(n, store) for n in ("n1", "n2", "n3")] == [
        "Node-01", "Node-02", "Node-03",
    ]


def test_names_recorded_after_suppression_are_dropped():
    registry = IdentityRegistry()
    registry.suppress()
    registry.record("n1", "Grace")
    assert registry.real_name("n1") is None
    assert registry.display_name("n1", _store("n1")) == "Node-01"


def test_suppression_is_one_way():
    registry = IdentityRegistry()
    registry.record("n1", "Ada")
    registry.suppress()
    assert registry.suppress() is False
    assert registry.suppressed is True
    assert registry.real_name("n1") is None


def test_reset_starts_unsuppressed():
    registry = IdentityRegistry()
    registry.suppress()
    registry.reset()
    assert registry.suppressed is False


def test_positional_label_padding():
    assert positional_label(0) == "Node-01"
    assert positional_label(11) == "Node-12"
