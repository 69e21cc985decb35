"""Config hash recorded alongside audit output.

Two audit CSVs are only comparable when they were produced under the same
settings snapshot; the hash makes that visible per row.
"""
import hashlib
import json

from purerand.config import settings


def get_config_hash() -> str:
    """
    Generate hash of the settings that affect audit results.

    Returns 16-char hex hash of config snapshot.
    """
    config_snapshot = {
        "audit_buckets": settings.audit_buckets,
        "audit_max_chi_square_ratio": settings.audit_max_chi_square_ratio,
        "audit_samples": settings.audit_samples,
        "audit_seed": settings.audit_seed,
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
