"""Argument validators for seeds, bounds and audit parameters."""
from typing import Any

from purerand.errors import ErrorCode, GeneratorError

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1
I32_MIN, I32_MAX = -(2**31), 2**31 - 1
I64_MIN, I64_MAX = -(2**63), 2**63 - 1


def _require_int(value: Any, name: str) -> int:
    # bool is an int subclass; True is not a seed
    if isinstance(value, bool) or not isinstance(value, int):
        raise GeneratorError(
            ErrorCode.INVALID_TYPE,
            f"{name} must be an int, got {type(value).__name__}.",
        )
    return value


def validate_u32_seed(value: Any) -> int:
    """
    Validate a generator seed.

    Raises INVALID_TYPE for non-int values and SEED_OUT_OF_RANGE outside
    [0, 2**32 - 1].
    """
    seed = _require_int(value, "seed")
    if not 0 <= seed <= U32_MAX:
        raise GeneratorError(
            ErrorCode.SEED_OUT_OF_RANGE,
            f"Seed {seed} is outside [0, {U32_MAX}].",
        )
    return seed


def validate_bound(value: Any, name: str, low: int, high: int) -> int:
    """Validate a range bound against the operation's integer range."""
    bound = _require_int(value, name)
    if not low <= bound <= high:
        raise GeneratorError(
            ErrorCode.BOUND_OUT_OF_RANGE,
            f"{name}={bound} is outside [{low}, {high}].",
        )
    return bound


def validate_u32_bound(value: Any, name: str) -> int:
    return validate_bound(value, name, 0, U32_MAX)


def validate_u64_bound(value: Any, name: str) -> int:
    return validate_bound(value, name, 0, U64_MAX)


def validate_count(value: Any) -> int:
    """Validate a sample count for batch helpers."""
    count = _require_int(value, "count")
    if count < 0:
        raise GeneratorError(
            ErrorCode.BOUND_OUT_OF_RANGE,
            f"count must be non-negative, got {count}.",
        )
    return count


def validate_audit_params(samples: int, buckets: int) -> None:
    """
    Validate uniformity audit parameters.

    Raises INVALID_AUDIT_PARAMS unless samples >= 1 and 2 <= buckets <= samples.
    """
    if samples < 1:
        raise GeneratorError(
            ErrorCode.INVALID_AUDIT_PARAMS,
            f"samples must be positive, got {samples}.",
        )
    if buckets < 2 or buckets > samples:
        raise GeneratorError(
            ErrorCode.INVALID_AUDIT_PARAMS,
            f"buckets must be in [2, samples], got {buckets}.",
        )
