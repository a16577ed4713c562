from __future__ import annotations

from httpmeta.client_ip import join_host_port, resolve_client_ip
from httpmeta.config import Settings, get_settings
from httpmeta.quality_values import QualityValue, parse_and_sort_quality_values


def _remote_addr(request) -> str:
    client = request.client
    if not client or not client.host:
        return ''
    return join_host_port(client.host, client.port if client.port is not None else '')


def client_ip_from_request(request, settings: Settings | None = None) -> str:
    settings = settings or get_settings()
    forwarded_for = ''
    if settings.trust_forwarded_for:
        forwarded_for = request.headers.get(settings.forwarded_for_header, '')
    return resolve_client_ip(forwarded_for, _remote_addr(request))


def quality_values_from_request(
    request,
    header_name: str | None = None,
    settings: Settings | None = None,
) -> list[QualityValue]:
    settings = settings or get_settings()
    header_value = request.headers.get(header_name or settings.accept_header, '')
    return parse_and_sort_quality_values(header_value)
