"""Label-derived seeds for independent generator streams."""
import hashlib


def seed_from_label(label: str) -> int:
    """Convert a string label to a 32-bit seed deterministically."""
    return int(hashlib.sha256(label.encode()).hexdigest(), 16) % (2**32)
