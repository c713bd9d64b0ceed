from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from src.domain.exceptions import ProviderUnavailable
from src.domain.models import Coordinate, ErrorSeverity, RouteResult


@dataclass(slots=True)
class FakeErrorReporter:
    reports: list[tuple[str, ErrorSeverity, str | None, dict]] = field(
        default_factory=list
    )

    def report(
        self,
        error: BaseException,
        *,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        context: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        self.reports.append((str(error), severity, context, dict(metadata or {})))

    @property
    def severities(self) -> list[ErrorSeverity]:
        return [r[1] for r in self.reports]


@dataclass(slots=True)
class FakeSleep:
    delays: list[float] = field(default_factory=list)

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@dataclass(slots=True)
class FakePublisher:
    messages: list[tuple[str, dict]] = field(default_factory=list)
    fail_on: set[str] = field(default_factory=set)

    async def publish(self, name: str, data: Mapping[str, Any]) -> None:
        if name in self.fail_on:
            raise ConnectionError(f"channel down while publishing {name}")
        self.messages.append((name, dict(data)))

    def named(self, name: str) -> list[dict]:
        return [data for n, data in self.messages if n == name]


@dataclass(slots=True)
class FakeDirectionsProvider:
    route: RouteResult | None = None
    geocoded: Coordinate | None = None
    calls: int = 0

    async def geocode(self, address: str) -> Coordinate | None:
        return self.geocoded

    async def reverse_geocode(self, coordinate: Coordinate) -> str | None:
        return None

    async def calculate_route(self, start, end, **kwargs) -> RouteResult:
        self.calls += 1
        if self.route is None:
            raise ProviderUnavailable("No route found: ZERO_RESULTS")
        return self.route
