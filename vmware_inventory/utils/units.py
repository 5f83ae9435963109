# vmware_inventory/utils/units.py
"""
Unit conversion helpers for hardware and capacity figures.
All conversions use binary (1024-based) units.
"""

from decimal import Decimal, ROUND_DOWN

BYTES_PER_GIB = 1024 ** 3
BYTES_PER_TIB = 1024 ** 4


def disk_capacity_bytes(block_size: int, block_count: int) -> int:
    """Raw capacity of a disk from its LBA dimensions"""
    return int(block_size or 0) * int(block_count or 0)


def bytes_to_gib(size_bytes: int) -> int:
    """Whole GiB contained in size_bytes (truncated)"""
    return int(size_bytes or 0) // BYTES_PER_GIB


def bytes_to_tib(size_bytes: int) -> float:
    return int(size_bytes or 0) / BYTES_PER_TIB


def cores_per_socket(total_cores: int, sockets: int) -> int:
    """Integer cores per socket; 0 when there are no sockets"""
    if not sockets or sockets <= 0:
        return 0
    return int(total_cores or 0) // sockets


def format_tib(value: float) -> str:
    """
    Render a TiB value with one decimal place, truncating rather than rounding.

    Args:
        value: Capacity in TiB

    Returns:
        String such as '3.6'
    """
    quantized = Decimal(repr(float(value or 0.0))).quantize(Decimal('0.1'), rounding=ROUND_DOWN)
    return f"{quantized:.1f}"
