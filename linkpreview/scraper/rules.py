"""Static tables consumed by the scraper core.

Kept as plain data so they can be extended without touching control flow;
every function that reads one of these accepts an override argument.
"""

from __future__ import annotations

import ipaddress
import re

# ---------------------------------------------------------------------------
# Private / reserved address space
# ---------------------------------------------------------------------------

PRIVATE_IPV4_NETWORKS: tuple[ipaddress.IPv4Network, ...] = tuple(
    ipaddress.IPv4Network(cidr)
    for cidr in (
        "0.0.0.0/8",        # "this" network
        "10.0.0.0/8",
        "127.0.0.0/8",      # loopback
        "169.254.0.0/16",   # link-local
        "172.16.0.0/12",
        "192.168.0.0/16",
        "224.0.0.0/4",      # multicast
        "240.0.0.0/4",      # reserved, includes broadcast
    )
)

PRIVATE_IPV6_NETWORKS: tuple[ipaddress.IPv6Network, ...] = tuple(
    ipaddress.IPv6Network(cidr)
    for cidr in (
        "::/128",           # unspecified
        "::1/128",          # loopback
        "fc00::/7",         # unique-local, covers fd00::/8
        "fe80::/10",        # link-local
        "fec0::/10",        # deprecated site-local
        "ff00::/8",         # multicast
        "2001:db8::/32",    # documentation
    )
)

BLOCKED_HOSTNAMES: frozenset[str] = frozenset({"localhost"})

# ---------------------------------------------------------------------------
# URL normalization
# ---------------------------------------------------------------------------

TRACKING_PARAMS: frozenset[str] = frozenset({
    # UTM
    "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
    # Facebook
    "fbclid", "fb_action_ids", "fb_action_types", "fb_ref", "fb_source",
    # Google
    "gclid", "gclsrc", "dclid",
    # Other common
    "ref", "referrer", "source", "campaign", "medium",
    # Social
    "igshid", "ncid", "sr_share",
    # Email
    "mc_cid", "mc_eid",
    # General
    "_ga", "_gl", "hsCtaTracking",
})

TRACKING_PREFIXES: tuple[str, ...] = ("utm_",)

# ---------------------------------------------------------------------------
# Price scanning: tried in order, first match wins.  Amounts are plain digits
# with an optional two-digit fraction; a thousands separator ends the match,
# so "$1,299.99" scans as "1".
# ---------------------------------------------------------------------------

PRICE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\$(\d+(?:\.\d{2})?)"), "USD"),
    (re.compile(r"(\d+(?:\.\d{2})?)\s*USD", re.IGNORECASE), "USD"),
    (re.compile(r"(\d+(?:\.\d{2})?)\s*EUR", re.IGNORECASE), "EUR"),
    (re.compile(r"£(\d+(?:\.\d{2})?)"), "GBP"),
    (re.compile(r"€(\d+(?:\.\d{2})?)"), "EUR"),
)
