"""Library configuration derived from the environment."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for diagnostics and the uniformity audit."""

    model_config = ConfigDict(env_prefix="PURERAND_")

    # Diagnostics
    debug: bool = False
    emit_range_swap_diagnostics: bool = True

    # Uniformity audit defaults (scripts/audit_stream.py)
    audit_seed: str = "AUDIT_2025"
    audit_samples: int = 100_000
    audit_buckets: int = 16
    audit_max_chi_square_ratio: float = 2.0  # chi2 / dof ceiling before the audit fails


settings = Settings()
