"""Error codes and exceptions for out-of-domain arguments."""
from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes raised by validators."""

    INVALID_TYPE = "INVALID_TYPE"
    SEED_OUT_OF_RANGE = "SEED_OUT_OF_RANGE"
    BOUND_OUT_OF_RANGE = "BOUND_OUT_OF_RANGE"
    INVALID_AUDIT_PARAMS = "INVALID_AUDIT_PARAMS"


# Default messages, used when the raiser does not supply one
ERROR_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.INVALID_TYPE: "Value must be an int.",
    ErrorCode.SEED_OUT_OF_RANGE: "Seed must be an unsigned 32-bit integer.",
    ErrorCode.BOUND_OUT_OF_RANGE: "Bound is outside the operation's integer range.",
    ErrorCode.INVALID_AUDIT_PARAMS: "Audit parameters are invalid.",
}


class ErrorBody(BaseModel):
    """Serializable error shape, printed by the audit script."""

    code: str
    message: str


class GeneratorError(Exception):
    """Raised when an argument falls outside an operation's domain."""

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.code = code
        self.message = message or ERROR_DESCRIPTIONS[code]
        super().__init__(self.message)

    def to_body(self) -> ErrorBody:
        """Convert to ErrorBody."""
        return ErrorBody(code=self.code.value, message=self.message)
