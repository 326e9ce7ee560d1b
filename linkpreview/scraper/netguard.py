"""Private-network classification for outbound destinations.

Fails closed: an address that cannot be parsed, a name that does not resolve,
or a name that resolves to nothing is treated as private.  A DNS name is
private if *any* of its A/AAAA records is.
"""

from __future__ import annotations

import asyncio
import ipaddress
import logging
import socket
from typing import Iterable, List, Union

from linkpreview.scraper.models import HostClass
from linkpreview.scraper.rules import (
    BLOCKED_HOSTNAMES,
    PRIVATE_IPV4_NETWORKS,
    PRIVATE_IPV6_NETWORKS,
)

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


# ---------------------------------------------------------------------------
# Address rules
# ---------------------------------------------------------------------------

def is_private_ipv4(
    ip: ipaddress.IPv4Address,
    networks: Iterable[ipaddress.IPv4Network] = PRIVATE_IPV4_NETWORKS,
) -> bool:
    return any(ip in net for net in networks)


def is_private_ipv6(
    ip: ipaddress.IPv6Address,
    networks: Iterable[ipaddress.IPv6Network] = PRIVATE_IPV6_NETWORKS,
    ipv4_networks: Iterable[ipaddress.IPv4Network] = PRIVATE_IPV4_NETWORKS,
) -> bool:
    """IPv4-mapped addresses (``::ffff:a.b.c.d``) are judged by the IPv4 rules."""
    if ip.ipv4_mapped is not None:
        return is_private_ipv4(ip.ipv4_mapped, ipv4_networks)
    return any(ip in net for net in networks)


def is_private_ip(address: IPAddress) -> bool:
    if isinstance(address, ipaddress.IPv4Address):
        return is_private_ipv4(address)
    return is_private_ipv6(address)


def parse_ip_literal(host: str) -> IPAddress | None:
    """Return *host* as an address object, or ``None`` if it is not an IP literal.

    Brackets and an IPv6 zone id (``fe80::1%eth0``) are stripped first.
    """
    literal = host.strip()
    if literal.startswith("[") and literal.endswith("]"):
        literal = literal[1:-1]
    if ":" in literal and "%" in literal:
        literal = literal.split("%", 1)[0]
    try:
        return ipaddress.ip_address(literal.lower())
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# DNS
# ---------------------------------------------------------------------------

async def resolve_host(host: str) -> List[str]:
    """Return every A/AAAA address for *host* using the loop's resolver.

    Raises:
        OSError: If the lookup fails (``socket.gaierror`` is a subclass).
    """
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(host, None, proto=socket.IPPROTO_TCP)
    return [info[4][0] for info in infos]


async def classify_host(host: str) -> HostClass:
    """Classify *host* (name or IP literal) as public or private."""
    literal = (host or "").strip()
    if literal.startswith("[") and literal.endswith("]"):
        literal = literal[1:-1]
    if not literal or literal.lower().rstrip(".") in BLOCKED_HOSTNAMES:
        return HostClass.PRIVATE

    address = parse_ip_literal(literal)
    if address is not None:
        return HostClass.PRIVATE if is_private_ip(address) else HostClass.PUBLIC

    try:
        resolved = await resolve_host(literal)
    except (OSError, ValueError) as exc:
        logger.info("DNS lookup for %r failed (%s); treating as private", literal, exc)
        return HostClass.PRIVATE

    if not resolved:
        logger.info("DNS lookup for %r returned no records; treating as private", literal)
        return HostClass.PRIVATE

    for raw in resolved:
        address = parse_ip_literal(raw)
        if address is None or is_private_ip(address):
            logger.debug("%r resolves to non-public address %s", literal, raw)
            return HostClass.PRIVATE
    return HostClass.PUBLIC
