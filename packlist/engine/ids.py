"""Deterministic identifiers for rules and packing-list instances."""

import hashlib
import json
from typing import Protocol

from packlist.config import get_settings
from packlist.models.rules import DefaultItemRule


class InstanceIdGenerator(Protocol):
    """Capability that names an instance from its scoping coordinates."""

    def __call__(self, rule_id: str, person_id: str | None, day_index: int | None, is_extra: bool) -> str: ...


class HashInstanceIdGenerator:
    """Derives instance ids from a sha256 digest of the scoping coordinates.

    Same coordinates always give the same id, so recomputation is idempotent
    and overrides keyed by id keep pointing at the same line.
    """

    def __init__(self, length: int | None = None):
        self.length = length if length is not None else get_settings().instance_id_length

    def __call__(self, rule_id: str, person_id: str | None, day_index: int | None, is_extra: bool) -> str:
        payload = json.dumps(
            {"rule": rule_id, "person": person_id, "day": day_index, "extra": is_extra},
            sort_keys=True,
        )
        digest = hashlib.sha256(payload.encode()).hexdigest()
        return f"{rule_id}:{digest[: self.length]}"


def calculate_rule_hash(rule: DefaultItemRule) -> str:
    """Digest of the parts of a rule that affect what gets packed.

    Ids, notes and provenance are excluded so cosmetic edits keep the hash.
    """
    data = {
        "name": rule.name,
        "calculation": rule.calculation.model_dump(mode="json"),
        "conditions": [c.model_dump(mode="json", exclude={"notes"}) for c in rule.conditions],
    }
    sorted_json = json.dumps(data, sort_keys=True)
    return hashlib.sha256(sorted_json.encode()).hexdigest()[:12]
