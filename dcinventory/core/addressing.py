"""IPv4 address-space arithmetic for address pools.

Addresses are handled as unsigned 32-bit integers. Octets are composed and
decomposed with explicit shifts and masks, and every intermediate value is
masked to 32 bits.
"""

from __future__ import annotations

from collections.abc import Iterator

from dcinventory.core.errors import ConfigError

UINT32_MASK = 0xFFFFFFFF

MIN_PREFIX = 8
MAX_PREFIX = 30

STATUS_AVAILABLE = "available"
STATUS_ASSIGNED = "assigned"
STATUS_RESERVED = "reserved"
STATUS_BLOCKED = "blocked"

ADDRESS_STATUSES = (STATUS_AVAILABLE, STATUS_ASSIGNED, STATUS_RESERVED, STATUS_BLOCKED)


def ip_to_int(address: str) -> int:
    """Parse a dotted-quad string into an unsigned 32-bit integer.

    Raises:
        ConfigError: if *address* is not four decimal octets in 0-255.
    """
    if not isinstance(address, str):
        raise ConfigError(f"Invalid IPv4 address: {address!r}")

    parts = address.strip().split(".")
    if len(parts) != 4:
        raise ConfigError(f"Invalid IPv4 address: {address!r}")

    value = 0
    for part in parts:
        if not part.isascii() or not part.isdigit() or len(part) > 3:
            raise ConfigError(f"Invalid IPv4 address: {address!r}")
        if len(part) > 1 and part[0] == "0":
            # "010" is octal in some parsers and decimal in others
            raise ConfigError(f"Leading zeros are not allowed in IPv4 address: {address!r}")
        octet = int(part)
        if octet > 255:
            raise ConfigError(f"Invalid IPv4 address: {address!r}")
        value = ((value << 8) | octet) & UINT32_MASK
    return value


def int_to_ip(value: int) -> str:
    """Convert an unsigned 32-bit integer back to dotted-quad notation."""
    if value < 0 or value > UINT32_MASK:
        raise ValueError(f"Value out of IPv4 range: {value}")
    return ".".join(
        str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0)
    )


def is_valid_ipv4(address: str) -> bool:
    try:
        ip_to_int(address)
    except ConfigError:
        return False
    return True


def validate_prefix(prefix: int) -> int:
    if isinstance(prefix, bool) or not isinstance(prefix, int):
        raise ConfigError(f"Prefix length must be an integer, got {prefix!r}")
    if prefix < MIN_PREFIX or prefix > MAX_PREFIX:
        raise ConfigError(
            f"Prefix length must be between {MIN_PREFIX} and {MAX_PREFIX}, got /{prefix}",
            prefix_length=prefix,
        )
    return prefix


def netmask(prefix: int) -> int:
    return (UINT32_MASK << (32 - prefix)) & UINT32_MASK


def usable_host_count(prefix: int) -> int:
    """Number of usable hosts in a /prefix block (network and broadcast excluded)."""
    validate_prefix(prefix)
    return (1 << (32 - prefix)) - 2


def network_bounds(network: str, prefix: int) -> tuple[int, int]:
    """Return (network, broadcast) as integers for a validated, aligned block.

    Raises:
        ConfigError: on a malformed address, an unsupported prefix, or a
            network address with host bits set.
    """
    validate_prefix(prefix)
    base = ip_to_int(network)
    if base & ~netmask(prefix) & UINT32_MASK:
        raise ConfigError(
            f"{network}/{prefix} has host bits set; "
            f"did you mean {int_to_ip(base & netmask(prefix))}/{prefix}?",
            network_address=network,
        )
    total = 1 << (32 - prefix)
    return base, (base + total - 1) & UINT32_MASK


def generate_address_space(
    network: str,
    prefix: int,
    gateway: str | None = None,
) -> Iterator[tuple[str, str]]:
    """Yield ``(address, status)`` for every usable host of ``network/prefix``.

    Addresses are produced in ascending order from ``network + 1`` to
    ``broadcast - 1``. The gateway, when given, is ``reserved``; every other
    address is ``available``.

    All validation happens before the first item is produced, so a caller
    that gets an iterator back can rely on it being well-formed.
    """
    base, broadcast = network_bounds(network, prefix)
    gateway_int = ip_to_int(gateway) if gateway else None
    return _iter_hosts(base, broadcast, gateway_int)


def _iter_hosts(base: int, broadcast: int, gateway: int | None) -> Iterator[tuple[str, str]]:
    for value in range(base + 1, broadcast):
        status = STATUS_RESERVED if value == gateway else STATUS_AVAILABLE
        yield int_to_ip(value), status


def contains(network: str, prefix: int, address: str) -> bool:
    """True when *address* is a usable host of ``network/prefix``."""
    base, broadcast = network_bounds(network, prefix)
    value = ip_to_int(address)
    return base < value < broadcast
