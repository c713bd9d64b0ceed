from __future__ import annotations

import pytest

from src.domain.algorithms import policy
from src.domain.models import PerformanceStatus


@pytest.mark.parametrize("table_name", sorted(policy.TABLES))
def test_every_table_covers_every_status(table_name: str) -> None:
    assert set(policy.TABLES[table_name]) == set(PerformanceStatus)


@pytest.mark.parametrize(
    ("performance", "battery", "moving", "expected"),
    [
        (PerformanceStatus.EXCELLENT, False, True, 2000),
        (PerformanceStatus.EXCELLENT, False, False, 5000),
        (PerformanceStatus.GOOD, False, True, 5000),
        (PerformanceStatus.GOOD, False, False, 5000),
        (PerformanceStatus.DEGRADED, False, True, 5000),
        (PerformanceStatus.DEGRADED, False, False, 10000),
        (PerformanceStatus.POOR, False, True, 15000),
        (PerformanceStatus.POOR, False, False, 15000),
        (PerformanceStatus.GOOD, True, False, 30000),
        (PerformanceStatus.EXCELLENT, True, True, 15000),
    ],
)
def test_optimal_location_interval(
    performance: PerformanceStatus, battery: bool, moving: bool, expected: int
) -> None:
    assert (
        policy.optimal_location_interval_ms(
            performance, battery_optimized=battery, is_moving=moving
        )
        == expected
    )


def test_battery_optimization_never_shortens_interval() -> None:
    for status in PerformanceStatus:
        for moving in (True, False):
            normal = policy.optimal_location_interval_ms(
                status, battery_optimized=False, is_moving=moving
            )
            saving = policy.optimal_location_interval_ms(
                status, battery_optimized=True, is_moving=moving
            )
            assert saving >= normal


def test_map_frequency_animation_and_trail_tables() -> None:
    assert [policy.optimal_map_update_frequency(s) for s in PerformanceStatus] == [
        60,
        30,
        15,
        10,
    ]
    assert [policy.should_use_animations(s) for s in PerformanceStatus] == [
        True,
        True,
        False,
        False,
    ]
    assert [policy.optimal_trail_length(s) for s in PerformanceStatus] == [
        100,
        50,
        25,
        10,
    ]


def test_recommendations_for_poor_performance() -> None:
    recs = policy.performance_recommendations(PerformanceStatus.POOR)
    assert "Reduce map update frequency" in recs
    assert len(recs) == 4


@pytest.mark.parametrize(
    ("frame_rate", "ops", "expected"),
    [
        (20.0, (), PerformanceStatus.POOR),
        (60.0, (), PerformanceStatus.EXCELLENT),
        (60.0, (100.0, 200.0), PerformanceStatus.EXCELLENT),
        (45.0, (100.0,), PerformanceStatus.GOOD),
        (60.0, (1500.0, 100.0, 100.0, 100.0), PerformanceStatus.GOOD),
        (60.0, (1500.0, 1500.0, 100.0), PerformanceStatus.DEGRADED),
    ],
)
def test_classify_performance(
    frame_rate: float, ops: tuple[float, ...], expected: PerformanceStatus
) -> None:
    assert policy.classify_performance(frame_rate, ops) is expected
