"""Report summary entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class ReportModel:  # pylint: disable=too-many-instance-attributes
    """Run-level statistics derived from the aggregator snapshot."""

    total: int
    passed: int
    failed: int
    skipped: int
    locales: tuple[str, ...]
    realms: tuple[str, ...]
    payment_methods: tuple[str, ...]
    custom_tag_keys_by_suite: Mapping[str, tuple[str, ...]]
    total_duration_ms: float
    suite_count: int

    def custom_tag_keys(self, suite_name: str) -> tuple[str, ...]:
        """Extra table columns for one suite, in first-seen order."""
        return self.custom_tag_keys_by_suite.get(suite_name, ())

    @property
    def all_custom_tag_keys(self) -> tuple[str, ...]:
        keys: dict[str, None] = {}
        for suite_keys in self.custom_tag_keys_by_suite.values():
            keys.update(dict.fromkeys(suite_keys))
        return tuple(keys)
