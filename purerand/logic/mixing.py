"""Integer mixing functions behind every generation step.

Both variants run the same five steps on the seed; only the width that
results are wrapped to differs. Python ints never overflow, so every step
masks back to the target width to reproduce wrapping arithmetic.
"""

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF

MIX_MULTIPLIER = 0x27d4eb2d


def _mix(seed: int, mask: int) -> int:
    n = seed & mask
    n = (n ^ 61) ^ (n >> 16)
    n = (n + (n << 3)) & mask
    n ^= n >> 4
    n = (n * MIX_MULTIPLIER) & mask
    n ^= n >> 15
    return n


def mix32(seed: int) -> int:
    """Scramble a 32-bit seed into a 32-bit value."""
    return _mix(seed, MASK32)


def mix64(seed: int) -> int:
    """Scramble a 32-bit seed, widened to 64 bits, into a 64-bit value."""
    return _mix(seed, MASK64)


def to_signed(value: int, bits: int) -> int:
    """Reinterpret an unsigned value of the given width as two's complement."""
    sign_bit = 1 << (bits - 1)
    value &= (1 << bits) - 1
    return value - (1 << bits) if value & sign_bit else value


def wrapping_abs(value: int, bits: int) -> int:
    """
    Absolute value in two's complement of the given width.

    The most negative value has no positive counterpart and maps to itself,
    e.g. wrapping_abs(-2**31, 32) == -2**31.
    """
    return to_signed(abs(value), bits)
