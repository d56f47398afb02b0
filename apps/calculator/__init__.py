"""Calculator service.

:class:`Calculator` validates a calculation request and dispatches it to one
of four arithmetic operations.  The HTTP layer in :mod:`apps.api.main` only
translates the exceptions raised here into JSON error bodies; all of the
branching lives in this module so it can be exercised without a server.

Division by zero is not an error.  It produces the sentinel string
``"Cannot divide by zero"`` as a normal, successful result.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from typing import Any, Callable, Dict

from lib.contracts.api import (
    DIVIDE_BY_ZERO,
    CalculationRequest,
    CalculationResponse,
    CalculationResult,
    Operation,
)
from lib.utils.helpers import Number, _is_missing_val, _js_number
from lib.utils.validation import ensure


MISSING_FIELDS_MESSAGE = "Missing required fields: a, b, operation"
INVALID_OPERATION_MESSAGE = "Invalid operation"


class CalculatorError(ValueError):
    """Base class for rejected calculations; carries the HTTP status."""

    status_code = 400


class MissingFieldError(CalculatorError):
    """``a``, ``b`` or ``operation`` was not provided."""


class InvalidOperationError(CalculatorError):
    """``operation`` was provided but is not one of the known tags."""


def _divide(a: Number, b: Number) -> Any:
    if b == 0:
        return DIVIDE_BY_ZERO
    return a / b


OPERATIONS: Dict[Operation, Callable[[Number, Number], Any]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": _divide,
}


@dataclass
class Calculator:
    """Four-function calculator.

    Parameters
    ----------
    operations:
        Mapping of operation tag to a binary callable.  Defaults to
        :data:`OPERATIONS`.
    """

    operations: Dict[str, Callable[[Number, Number], Any]] = field(
        default_factory=lambda: dict(OPERATIONS)
    )

    def calculate(self, a: Any, b: Any, operation: Any) -> CalculationResult:
        """Return the result of applying ``operation`` to ``a`` and ``b``.

        Raises :class:`MissingFieldError` when any input is absent and
        :class:`InvalidOperationError` for an unknown tag.  The presence check
        runs before the tag is looked at.
        """

        ensure(
            not any(_is_missing_val(v) for v in (a, b, operation)),
            MISSING_FIELDS_MESSAGE,
            MissingFieldError,
        )
        func = self.operations.get(operation) if isinstance(operation, str) else None
        if func is None:
            raise InvalidOperationError(INVALID_OPERATION_MESSAGE)

        try:
            result = func(a, b)
        except OverflowError:
            # Mirrors an infinite JSON number, which serialises as null.
            return None
        if isinstance(result, str):
            return result
        return _js_number(result)

    def handle(self, req: CalculationRequest) -> CalculationResponse:
        """Run ``req`` and wrap the value in a :class:`CalculationResponse`.

        Presence is taken from the keys the client sent, so only an omitted
        operand is a missing field.
        """

        ensure(not req.missing_fields(), MISSING_FIELDS_MESSAGE, MissingFieldError)
        return CalculationResponse(
            result=self.calculate(req.a, req.b, req.operation)
        )


__all__ = [
    "Calculator",
    "CalculatorError",
    "InvalidOperationError",
    "MissingFieldError",
    "OPERATIONS",
]
