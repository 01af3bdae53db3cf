"""Override merger: layers user corrections on top of computed instances."""

import logging
from collections.abc import Iterable, Sequence

from packlist.models.mutations import ExcludeItem, InstanceMutation, OverrideQuantity, TogglePacked
from packlist.models.packing import Override, PackingListItem

logger = logging.getLogger(__name__)


def merge_overrides(overrides: Iterable[Override]) -> dict[str, Override]:
    """Collapse overrides by instance id; later fields win over earlier ones."""
    merged: dict[str, Override] = {}
    for override in overrides:
        current = merged.get(override.instance_id)
        if current is None:
            merged[override.instance_id] = override
            continue
        updates = override.model_dump(exclude_unset=True, exclude_none=True, exclude={"instance_id"})
        merged[override.instance_id] = current.model_copy(update=updates)
    return merged


def apply_overrides(instances: Sequence[PackingListItem], overrides: Iterable[Override]) -> list[PackingListItem]:
    """Apply quantity, exclusion and packed overrides to computed instances.

    Excluded instances are dropped. Overrides pointing at ids that are not in
    ``instances`` are ignored. Inputs are never mutated, and applying the same
    overrides again gives the same result.
    """
    by_id = merge_overrides(overrides)

    stale = set(by_id) - {item.id for item in instances}
    if stale:
        logger.debug(f"Ignoring {len(stale)} override(s) for instances not in the current list")

    result: list[PackingListItem] = []
    for item in instances:
        override = by_id.get(item.id)
        if override is None:
            result.append(item)
            continue
        if override.excluded:
            continue

        updates: dict[str, object] = {}
        if override.quantity is not None:
            updates["quantity"] = override.quantity
            updates["overridden"] = True
        if override.packed is not None:
            updates["packed"] = override.packed
        result.append(item.model_copy(update=updates) if updates else item)

    return result


def fold_mutations(
    overrides: Sequence[Override],
    mutations: Iterable[InstanceMutation],
) -> list[Override]:
    """Fold instance-level mutation requests into an updated override list.

    Toggling packed state flips whatever the overrides currently say
    (unpacked when nothing is recorded). Order of first appearance is kept.
    """
    merged = merge_overrides(overrides)

    for mutation in mutations:
        current = merged.get(mutation.instance_id) or Override(instance_id=mutation.instance_id)
        if isinstance(mutation, TogglePacked):
            merged[mutation.instance_id] = current.model_copy(update={"packed": not bool(current.packed)})
        elif isinstance(mutation, OverrideQuantity):
            merged[mutation.instance_id] = current.model_copy(update={"quantity": mutation.quantity})
        elif isinstance(mutation, ExcludeItem):
            merged[mutation.instance_id] = current.model_copy(update={"excluded": True})
        else:
            raise TypeError(f"Unsupported mutation: {type(mutation).__name__}")

    return list(merged.values())
