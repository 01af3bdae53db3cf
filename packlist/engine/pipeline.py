"""End-to-end derivation: snapshot -> instances -> overrides -> grouped view.

``compute_packing_list`` is a pure function of its inputs. ``PackingListMemo``
is an optional, explicitly owned cache for hosts that recompute on every
store change.
"""

import hashlib
import json
import time
from collections import OrderedDict

from pydantic import BaseModel, Field

from packlist.config import get_settings
from packlist.engine.expander import expand_rules
from packlist.engine.grouping import group_items
from packlist.engine.ids import InstanceIdGenerator
from packlist.engine.overrides import apply_overrides
from packlist.engine.validation import RuleValidationError, ensure_valid_rules
from packlist.models.common import ViewMode
from packlist.models.packing import GroupedView, PackingListItem, TripSnapshot, ViewFilters
from packlist.models.violations import RuleViolation
from packlist.utils.logging import StructuredEngineLogger
from packlist.utils.metrics import PrometheusEngineMetrics

_structured_logger = StructuredEngineLogger()
_metrics = PrometheusEngineMetrics()


class PackingListResult(BaseModel):
    """Merged instances, their grouped view, and non-blocking advisories."""

    instances: list[PackingListItem]
    view: GroupedView
    advisories: list[RuleViolation] = Field(default_factory=list)


def compute_packing_list(
    snapshot: TripSnapshot,
    mode: ViewMode | str | None = None,
    filters: ViewFilters | None = None,
    id_generator: InstanceIdGenerator | None = None,
) -> PackingListResult:
    """Derive the packing list for one consistent snapshot.

    Rules are validated up front; nothing is expanded if any rule is invalid.

    Raises:
        RuleValidationError: if any rule has a blocking violation
    """
    started = time.monotonic()
    mode = ViewMode(mode or get_settings().default_view_mode)

    try:
        advisories = ensure_valid_rules(snapshot.rules)
    except RuleValidationError as e:
        for violation in e.violations:
            _metrics.inc_violation(violation.code)
        _structured_logger.log_rejected(
            rule_ids=sorted({v.rule_id for v in e.violations if v.rule_id}),
            codes=[v.code for v in e.violations],
        )
        _metrics.record_computation("rejected", (time.monotonic() - started) * 1000)
        raise

    for advisory in advisories:
        _metrics.inc_violation(advisory.code)

    computed = expand_rules(snapshot.rules, snapshot.people, snapshot.days, id_generator)
    instances = apply_overrides(computed, snapshot.overrides)
    view = group_items(
        instances,
        mode,
        categories=snapshot.categories,
        people=snapshot.people,
        days=snapshot.days,
        filters=filters,
    )

    latency_ms = (time.monotonic() - started) * 1000
    _metrics.record_computation("computed", latency_ms)
    _structured_logger.log_computation(
        rule_count=len(snapshot.rules),
        instance_count=len(instances),
        latency_ms=latency_ms,
        zero_match_rules=sorted({i.rule_id for i in instances if i.zero_match is not None}),
    )

    return PackingListResult(instances=instances, view=view, advisories=advisories)


def snapshot_key(snapshot: TripSnapshot, mode: ViewMode | str, filters: ViewFilters | None) -> str:
    """Digest of the inputs that determine a computation's result."""
    data = {
        "snapshot": snapshot.model_dump(mode="json"),
        "mode": ViewMode(mode).value,
        "filters": filters.model_dump(mode="json") if filters else None,
    }
    sorted_json = json.dumps(data, sort_keys=True)
    return hashlib.sha256(sorted_json.encode()).hexdigest()


class PackingListMemo:
    """Bounded LRU of packing-list results keyed by a digest of their inputs.

    Owned by the caller; there is no shared or global instance. Results are
    deep-copied on the way out so callers cannot corrupt cached entries.
    """

    def __init__(self, max_entries: int | None = None, id_generator: InstanceIdGenerator | None = None):
        self.max_entries = max_entries if max_entries is not None else get_settings().memo_max_entries
        self.id_generator = id_generator
        self._entries: OrderedDict[str, PackingListResult] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def compute(
        self,
        snapshot: TripSnapshot,
        mode: ViewMode | str | None = None,
        filters: ViewFilters | None = None,
    ) -> PackingListResult:
        """Return the cached result for these inputs, computing it on a miss."""
        started = time.monotonic()
        mode = ViewMode(mode or get_settings().default_view_mode)
        key = snapshot_key(snapshot, mode, filters)

        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            _metrics.inc_memo_hit()
            _structured_logger.log_computation(
                rule_count=len(snapshot.rules),
                instance_count=len(cached.instances),
                latency_ms=(time.monotonic() - started) * 1000,
                cache_hit=True,
            )
            return cached.model_copy(deep=True)

        result = compute_packing_list(snapshot, mode, filters, self.id_generator)
        if self.max_entries > 0:
            self._entries[key] = result
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return result.model_copy(deep=True)
