"""Tag grammar parsing for ``@key:value`` test tags."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
NO_TAGS_PLACEHOLDER = "No tags"
PAYMENT_METHOD_KEY = "payment_method"

_LOCAL_KEYS = frozenset({"local", "locale"})
_REALM_KEY = "realm"


@dataclass(frozen=True)
class ScalarTagValue:
    """Custom tag holding a single value; later tags overwrite it."""

    value: str

    def display(self) -> str:
        return self.value

    def as_list(self) -> tuple[str, ...]:
        return (self.value,)


@dataclass(frozen=True)
class MultiTagValue:
    """Custom tag accumulating every value in encounter order."""

    values: tuple[str, ...]

    def display(self) -> str:
        return ", ".join(self.values)

    def as_list(self) -> tuple[str, ...]:
        return self.values


CustomTagValue = ScalarTagValue | MultiTagValue


@dataclass(frozen=True)
class TagMetadata:
    """Structured metadata extracted from a test's tags."""

    local: str
    realm: str
    custom_tags: Mapping[str, CustomTagValue]

    @property
    def payment_methods(self) -> tuple[str, ...]:
        value = self.custom_tags.get(PAYMENT_METHOD_KEY)
        return value.as_list() if value is not None else ()


def resolve_tags(tags: Sequence[str]) -> tuple[str, ...]:
    """Return the display tag list, substituting the placeholder when empty."""
    resolved = tuple(tags)
    return resolved if resolved else (NO_TAGS_PLACEHOLDER,)


def parse_tags(tags: Sequence[str], *, test_title: str = "") -> TagMetadata:
    """Parse raw tags into local, realm and custom tag values.

    ``@local:``/``@locale:`` set the locale, ``@realm:`` the realm,
    ``@payment_method:`` accumulates, any other ``@key:value`` is a scalar
    custom tag where the last occurrence wins. Tags without a leading ``@``,
    without a colon or with an empty key or value are ignored here.

    A warning is logged when local or realm stays unresolved.
    """
    local = NOT_AVAILABLE
    realm = NOT_AVAILABLE
    scalars: dict[str, str] = {}
    multi: dict[str, list[str]] = {}
    order: dict[str, None] = {}

    for tag in tags:
        parsed = _split_tag(tag)
        if parsed is None:
            continue
        key, value = parsed
        if key in _LOCAL_KEYS:
            local = value
        elif key == _REALM_KEY:
            realm = value
        elif key == PAYMENT_METHOD_KEY:
            multi.setdefault(key, []).append(value)
            order.setdefault(key, None)
        else:
            scalars[key] = value
            order.setdefault(key, None)

    custom_tags: dict[str, CustomTagValue] = {}
    for key in order:
        if key in multi:
            custom_tags[key] = MultiTagValue(tuple(multi[key]))
        else:
            custom_tags[key] = ScalarTagValue(scalars[key])

    metadata = TagMetadata(
        local=local, realm=realm, custom_tags=MappingProxyType(custom_tags)
    )
    if local == NOT_AVAILABLE or realm == NOT_AVAILABLE:
        logger.warning(
            "Missing tag data for test %r: local=%s realm=%s custom_tags=%s",
            test_title,
            local,
            realm,
            {key: value.display() for key, value in custom_tags.items()},
        )
    return metadata


def _split_tag(tag: str) -> tuple[str, str] | None:
    if not tag.startswith("@"):
        return None
    key, separator, value = tag[1:].partition(":")
    key = key.strip()
    value = value.strip()
    if not separator or not key or not value:
        return None
    return key, value
