"""Quality value lists as sent in ``Accept``-style headers.

See https://developer.mozilla.org/en-US/docs/Glossary/quality_values.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from functools import cmp_to_key

logger = logging.getLogger('httpmeta.quality_values')

QUALITY_VALUE_ENTRY_RE = re.compile(
    r'((?:\*|[A-Za-z0-9_+]+)/(?:\*|[A-Za-z0-9_+]+))(?:;q=([01](?:\.[0-9]{1,3})?))?'
)

# Priorities closer than this are considered equal.
PRIORITY_TOLERANCE = 0.001
DEFAULT_PRIORITY = 1.0


class MalformedPreferenceEntry(ValueError):
    def __init__(self, header_value: str, token: str) -> None:
        super().__init__(f'invalid HTTP quality value: {header_value!r}')
        self.header_value = header_value
        self.token = token


@dataclass(frozen=True)
class QualityValue:
    mime_type: str
    priority: float = DEFAULT_PRIORITY

    @property
    def specificity(self) -> int:
        if self.mime_type == '*/*':
            return 0
        if self.mime_type.endswith('/*'):
            return 1
        return 2


def _tokenize(value: str) -> list[str]:
    return [token.strip() for token in value.split(',') if token.strip()]


def parse_quality_values(header_value: str | None) -> list[QualityValue]:
    """Parse a header such as ``text/html,application/xml;q=0.9,*/*;q=0.8``.

    Entries are returned in header order. Use :func:`sort_quality_values`
    to rank them. Raises :class:`MalformedPreferenceEntry` if any entry is
    invalid; nothing is returned for partially valid headers.
    """
    if not header_value:
        return []

    values: list[QualityValue] = []
    for token in _tokenize(header_value):
        match = QUALITY_VALUE_ENTRY_RE.fullmatch(token)
        if match is None:
            logger.debug('quality_value_rejected token=%r', token)
            raise MalformedPreferenceEntry(header_value, token)

        mime_type, raw_priority = match.groups()
        priority = DEFAULT_PRIORITY
        if raw_priority is not None:
            priority = float(raw_priority)
            if priority > 1.0:
                logger.debug('quality_value_rejected token=%r reason=out_of_range', token)
                raise MalformedPreferenceEntry(header_value, token)

        values.append(QualityValue(mime_type=mime_type, priority=priority))

    return values


def _compare(left: QualityValue, right: QualityValue) -> int:
    delta = left.priority - right.priority
    if delta >= PRIORITY_TOLERANCE:
        return -1
    if -delta >= PRIORITY_TOLERANCE:
        return 1
    # equal priority: more specific types go first
    return right.specificity - left.specificity


def sort_quality_values(values: Iterable[QualityValue] | None) -> list[QualityValue]:
    """Most preferred first, by priority then specificity.

    The sort is stable, so full ties keep their original order.
    """
    if not values:
        return []
    return sorted(values, key=cmp_to_key(_compare))


def parse_and_sort_quality_values(header_value: str | None) -> list[QualityValue]:
    return sort_quality_values(parse_quality_values(header_value))
