"""Request and response models for the demo API."""
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator


DIVIDE_BY_ZERO = "Cannot divide by zero"

Operation = Literal["add", "subtract", "multiply", "divide"]

# A calculation result is a number or the divide-by-zero sentinel.  ``None``
# only appears when the arithmetic overflowed to a non-finite value.
NumericResult = Union[StrictInt, StrictFloat]
CalculationResult = Optional[Union[NumericResult, Literal["Cannot divide by zero"]]]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class CalculationRequest(_FrozenModel):
    """Incoming payload for ``POST /api/calculate``.

    Every field may be left out so that absent keys reach the calculator and
    are reported as a 400 rather than a schema error.  Presence is decided by
    :meth:`missing_fields`, not by the ``None`` defaults.  An explicit
    ``null`` operand is a type error like any other non-number.
    ``operation`` is untyped; a non-string tag is an invalid operation.
    """

    a: Optional[NumericResult] = None
    b: Optional[NumericResult] = None
    operation: Any = None

    @field_validator("a", "b", mode="before")
    @classmethod
    def reject_null_operand(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("Input should be a valid number")
        return v

    def missing_fields(self) -> List[str]:
        """Names of required fields the client did not send.

        ``operation`` also counts as missing when it is ``null`` or ``""``.
        """
        missing = [name for name in ("a", "b") if name not in self.model_fields_set]
        if self.operation is None or self.operation == "":
            missing.append("operation")
        return missing


class CalculationResponse(BaseModel):
    result: CalculationResult


class ErrorResponse(BaseModel):
    error: str


class User(_FrozenModel):
    id: int
    name: str
    email: str


class UsersResponse(BaseModel):
    users: List[User] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: str


class HelloResponse(BaseModel):
    message: str


class TimeResponse(BaseModel):
    message: str = "Current time"
    time: str
