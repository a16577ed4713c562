from __future__ import annotations

import logging
from ipaddress import IPv4Address, IPv6Address, ip_address, ip_network

logger = logging.getLogger('httpmeta.client_ip')

PRIVATE_IP_NETWORKS = tuple(
    ip_network(cidr)
    for cidr in (
        '127.0.0.0/8',  # IPv4 loopback
        '10.0.0.0/8',  # RFC1918
        '172.16.0.0/12',  # RFC1918
        '192.168.0.0/16',  # RFC1918
        '::1/128',  # IPv6 loopback
        'fe80::/10',  # IPv6 link-local
    )
)

IPV4_BROADCAST = IPv4Address('255.255.255.255')


def _parse_ip(value: str | None) -> IPv4Address | IPv6Address | None:
    if not value or '%' in value:
        return None
    try:
        parsed = ip_address(value)
    except ValueError:
        return None
    if isinstance(parsed, IPv6Address) and parsed.ipv4_mapped is not None:
        return parsed.ipv4_mapped
    return parsed


def is_private_ip(ip: IPv4Address | IPv6Address) -> bool:
    return any(ip in network for network in PRIVATE_IP_NETWORKS)


def is_global_unicast(ip: IPv4Address | IPv6Address) -> bool:
    """Routable unicast address, RFC1918 ranges included.

    This mirrors the classic "global unicast" test rather than
    ``ipaddress``'s ``is_global``, which also drops documentation and
    shared address space.
    """
    if ip.is_unspecified or ip.is_loopback or ip.is_multicast or ip.is_link_local:
        return False
    return ip != IPV4_BROADCAST


def split_host_port(address: str) -> tuple[str, str] | None:
    """Split ``host:port`` or ``[host]:port``; ``None`` when malformed."""
    if address.startswith('['):
        end = address.find(']')
        if end < 0 or address[end + 1:end + 2] != ':':
            return None
        host = address[1:end]
        port = address[end + 2:]
        if '[' in host or ':' in port:
            return None
    else:
        idx = address.rfind(':')
        if idx < 0:
            return None
        host = address[:idx]
        port = address[idx + 1:]
        if ':' in host or '[' in host or ']' in host:
            return None
    if '[' in port or ']' in port:
        return None
    return host, port


def join_host_port(host: str, port: int | str) -> str:
    if ':' in host:
        return f'[{host}]:{port}'
    return f'{host}:{port}'


def _resolve_from_forwarded_for(forwarded_for: str) -> str | None:
    # walk right to left: the last public hop is the one just before our proxies
    for token in reversed(forwarded_for.split(',')):
        candidate = token.strip()
        parsed = _parse_ip(candidate)
        if parsed is None:
            logger.debug('forwarded_hop_skipped hop=%r reason=invalid', candidate)
            continue
        if not is_global_unicast(parsed):
            logger.debug('forwarded_hop_skipped hop=%r reason=not_global_unicast', candidate)
            continue
        if is_private_ip(parsed):
            logger.debug('forwarded_hop_skipped hop=%r reason=private', candidate)
            continue
        return candidate
    return None


def _resolve_from_remote_addr(remote_addr: str) -> str:
    parts = split_host_port(remote_addr)
    if parts is None:
        logger.debug('remote_addr_unsplittable remote_addr=%r', remote_addr)
        return ''
    host, _ = parts
    parsed = _parse_ip(host)
    if parsed is not None:
        return str(parsed)
    return host


def resolve_client_ip(forwarded_for: str | None, remote_addr: str | None) -> str:
    """Best-effort public address of the client, ``''`` when unknown.

    ``forwarded_for`` is the raw ``X-Forwarded-For`` value and
    ``remote_addr`` the peer address of the connection, ``host:port`` or
    ``[host]:port``. Never raises.
    """
    resolved = _resolve_from_forwarded_for(forwarded_for or '')
    if resolved is not None:
        return resolved

    if not remote_addr:
        return ''
    return _resolve_from_remote_addr(remote_addr)
