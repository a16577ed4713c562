from httpmeta.client_ip import resolve_client_ip
from httpmeta.quality_values import (
    MalformedPreferenceEntry,
    QualityValue,
    parse_and_sort_quality_values,
    parse_quality_values,
    sort_quality_values,
)

__all__ = [
    'MalformedPreferenceEntry',
    'QualityValue',
    'parse_and_sort_quality_values',
    'parse_quality_values',
    'resolve_client_ip',
    'sort_quality_values',
]
