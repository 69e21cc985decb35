"""Immutable generator value and its typed transition functions.

Usage:

    g = Generator.new(42)
    g, n = g.next_ranged_u32(1, 10)
    g, flag = g.next_bool()

Every next_* call leaves the receiver untouched and returns the successor
generator together with the value; thread the returned generator forward.
"""
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, field_validator

from purerand.diagnostics import RangeSwappedEvent, diagnostic_service
from purerand.logic.mixing import mix32, mix64, to_signed, wrapping_abs
from purerand.seeding import seed_from_label
from purerand.validators import (
    I32_MAX,
    I32_MIN,
    I64_MAX,
    I64_MIN,
    U32_MAX,
    validate_bound,
    validate_count,
    validate_u32_bound,
    validate_u32_seed,
    validate_u64_bound,
)

# Half-range threshold, not a true midpoint: U32_MAX is odd, so values below
# it cover 2**31 - 1 outcomes and the rest cover 2**31 + 1.
HALF_U32 = U32_MAX // 2


class Generator(BaseModel):
    """
    Deterministic PRNG state.

    The seed is stored as given; mixing happens on the first next_* call.
    Generators with equal seeds are equal, hash equally and produce the
    same sequence. Instances are frozen.
    """

    model_config = ConfigDict(frozen=True)

    current_seed: int

    @field_validator("current_seed", mode="before")
    @classmethod
    def check_seed(cls, value: object) -> int:
        return validate_u32_seed(value)

    @classmethod
    def new(cls, seed: int) -> "Generator":
        """Build a generator from a caller-supplied 32-bit seed."""
        return cls(current_seed=seed)

    @classmethod
    def from_label(cls, label: str) -> "Generator":
        """Build a generator whose seed is derived from a string label."""
        return cls.new(seed_from_label(label))

    def advance(self) -> "Generator":
        """Return the canonical successor generator."""
        return Generator(current_seed=mix32(self.current_seed))

    # === Unsigned ===

    def next_u32(self) -> tuple["Generator", int]:
        generator = self.advance()
        return generator, mix32(generator.current_seed)

    def next_u64(self) -> tuple["Generator", int]:
        generator = self.advance()
        return generator, mix64(generator.current_seed)

    def next_bool(self) -> tuple["Generator", bool]:
        """True iff the next 32-bit value is below HALF_U32."""
        generator, raw = self.next_u32()
        return generator, raw < HALF_U32

    # === Signed ===

    def _sign_is_non_negative(self) -> bool:
        # Sign comes from the pre-advance seed, magnitude from the post-advance one.
        return mix32(self.current_seed) < HALF_U32

    def next_i32(self) -> tuple["Generator", int]:
        """
        Signed 32-bit value.

        The magnitude is the wrapping absolute value of the next 32-bit
        output read as signed. When that output is -2**31 the result is
        -2**31 regardless of sign.
        """
        non_negative = self._sign_is_non_negative()
        generator, raw = self.next_u32()
        magnitude = wrapping_abs(to_signed(raw, 32), 32)
        value = magnitude if non_negative else to_signed(-magnitude, 32)
        return generator, value

    def next_i64(self) -> tuple["Generator", int]:
        """Signed 64-bit value; same rule as next_i32 at 64 bits."""
        non_negative = self._sign_is_non_negative()
        generator, raw = self.next_u64()
        magnitude = wrapping_abs(to_signed(raw, 64), 64)
        value = magnitude if non_negative else to_signed(-magnitude, 64)
        return generator, value

    # === Ranged ===
    # Reduction is low + raw % span, so spans that do not divide the raw
    # output space carry modulo bias toward the low end of the range.

    def _next_ranged(
        self,
        operation: str,
        low: int,
        high: int,
        draw: Callable[[], tuple["Generator", int]],
    ) -> tuple["Generator", int]:
        if low > high:
            diagnostic_service.emit_range_swapped(
                RangeSwappedEvent(
                    operation=operation,
                    requested_from=low,
                    requested_to=high,
                    seed=self.current_seed,
                )
            )
            low, high = high, low
        generator, raw = draw()
        return generator, low + raw % (high - low + 1)

    def next_ranged_u32(self, from_: int, to: int) -> tuple["Generator", int]:
        """Value in [min(from_, to), max(from_, to)]; swapped bounds are diagnosed."""
        return self._next_ranged(
            "next_ranged_u32",
            validate_u32_bound(from_, "from_"),
            validate_u32_bound(to, "to"),
            self.next_u32,
        )

    def next_ranged_u64(self, from_: int, to: int) -> tuple["Generator", int]:
        return self._next_ranged(
            "next_ranged_u64",
            validate_u64_bound(from_, "from_"),
            validate_u64_bound(to, "to"),
            self.next_u64,
        )

    def next_ranged_i32(self, from_: int, to: int) -> tuple["Generator", int]:
        return self._next_ranged(
            "next_ranged_i32",
            validate_bound(from_, "from_", I32_MIN, I32_MAX),
            validate_bound(to, "to", I32_MIN, I32_MAX),
            self.next_u32,
        )

    def next_ranged_i64(self, from_: int, to: int) -> tuple["Generator", int]:
        return self._next_ranged(
            "next_ranged_i64",
            validate_bound(from_, "from_", I64_MIN, I64_MAX),
            validate_bound(to, "to", I64_MIN, I64_MAX),
            self.next_u64,
        )

    # === Derived ===

    def next_f64(self) -> tuple["Generator", float]:
        """
        Float in [0.0, 1.0) with 53 random bits from two next_u32 draws.

        next_u64 is not used: mix64 widens a 32-bit seed, so its top bits
        are not evenly spread over the 64-bit range.
        """
        generator, high = self.next_u32()
        generator, low = generator.next_u32()
        return generator, ((high >> 5) * 67108864 + (low >> 6)) * (1.0 / 9007199254740992)

    def take_u32(self, count: int) -> tuple["Generator", list[int]]:
        """Thread next_u32 count times; return the last generator and all values."""
        generator = self
        values: list[int] = []
        for _ in range(validate_count(count)):
            generator, value = generator.next_u32()
            values.append(value)
        return generator, values
