"""Demo API service.

:class:`DemoService` groups the handlers behind the public HTTP surface: the
health check, the greeting, the fixed user directory, the current-time echo
and the calculator.  Every method is a pure function of its arguments and the
wall clock, so the HTTP layer in :mod:`apps.api.main` can stay a thin mapping
from routes to methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from apps.calculator import Calculator
from lib.config.api_loader import ApiConfig
from lib.contracts.api import (
    CalculationRequest,
    CalculationResponse,
    HealthResponse,
    HelloResponse,
    TimeResponse,
    User,
    UsersResponse,
)
from lib.utils.helpers import _locale_time_string, _utcnow_iso


USERS: Tuple[User, ...] = (
    User(id=1, name="Alice", email="alice@example.com"),
    User(id=2, name="Bob", email="bob@example.com"),
    User(id=3, name="Charlie", email="charlie@example.com"),
)


@dataclass
class DemoService:
    """Facade over the static responders and the calculator."""

    config: ApiConfig = field(default_factory=ApiConfig)
    calculator: Calculator = field(default_factory=Calculator)
    users_directory: Tuple[User, ...] = USERS

    def health(self) -> HealthResponse:
        return HealthResponse(status="healthy", timestamp=_utcnow_iso())

    def hello(self) -> HelloResponse:
        return HelloResponse(message=self.config.hello_message)

    def users(self) -> UsersResponse:
        return UsersResponse(users=list(self.users_directory))

    def current_time(self) -> TimeResponse:
        return TimeResponse(message="Current time", time=_locale_time_string())

    def calculate(self, req: CalculationRequest) -> CalculationResponse:
        """Delegate to :meth:`Calculator.handle`; errors propagate to the caller."""

        return self.calculator.handle(req)


__all__ = ["DemoService", "USERS"]
