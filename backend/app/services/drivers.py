from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from app.models.enums import ScoreBand
from app.services.pillars import PillarResult


DEFAULT_ACTIONS = {
    "cashflow": "Maintain healthy cashflow",
    "stability": "Maintain financial safety net",
    "growth": "Continue wealth building",
    "behavior": "Keep up good habits",
}
OVERALL_FALLBACK_ACTION = "Keep up the great work!"


def weakest_pillar(pillars: Sequence[PillarResult]) -> PillarResult:
    # min() keeps the first pillar on ties
    return min(pillars, key=lambda pillar: pillar.score)


def synthesize_drivers(
    pillars: Sequence[PillarResult],
    twealth_index: int,
    band: ScoreBand,
) -> dict[str, dict[str, Any]]:
    weakest = weakest_pillar(pillars)

    drivers: dict[str, dict[str, Any]] = {
        pillar.name: {
            "drivers": list(pillar.drivers),
            "action": pillar.action or DEFAULT_ACTIONS.get(pillar.name, OVERALL_FALLBACK_ACTION),
        }
        for pillar in pillars
    }
    drivers["overall"] = {
        "drivers": [
            f"Your Twealth Index is {twealth_index}/100 ({band.value})",
            f"Weakest area: {weakest.name} ({weakest.score}/100)",
            *weakest.drivers[:1],
        ],
        "action": weakest.action or OVERALL_FALLBACK_ACTION,
    }
    return drivers
