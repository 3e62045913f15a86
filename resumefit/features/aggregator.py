from __future__ import annotations

from typing import Iterable, Mapping

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.scoring import ActionCategory, ActionItem, ComponentName, ComponentWeights, ScoreTier

_CATEGORY_COMPONENT: dict[str, ComponentName] = {
    "keywords": "keywords",
    "qualifications": "qualification_fit",
    "content": "content_quality",
    "sections": "sections",
    "format": "format",
}


def get_score_tier(overall: float) -> ScoreTier:
    tiers = get_scoring_value("tiers", []) or []
    for row in sorted(tiers, key=lambda item: float(item["min_score"]), reverse=True):
        if overall >= float(row["min_score"]):
            return row["label"]
    return "weak"


def combine_scores(scores: Mapping[str, int], weights: ComponentWeights) -> int:
    total = sum(scores[name] * weight for name, weight in weights.as_dict().items())
    return max(0, min(100, round(total)))


def potential_impact(category: ActionCategory, priority: str) -> int:
    entry = get_scoring_value(f"action_items.impact.{category}", 0)
    if isinstance(entry, dict):
        return int(entry.get(priority, entry.get("default", 0)))
    return int(entry or 0)


def build_action_items(
    raw_items: Mapping[ActionCategory, Iterable[tuple[str, str]]],
    component_scores: Mapping[str, int],
) -> tuple[ActionItem, ...]:
    order = {str(name): index for index, name in enumerate(get_scoring_value("action_items.priority_order", []) or [])}
    max_items = int(get_scoring_value("action_items.max_items", 5))

    items: list[ActionItem] = []
    seen: set[str] = set()
    for category, pairs in raw_items.items():
        for priority, message in pairs:
            if message in seen:
                continue
            seen.add(message)
            items.append(
                ActionItem(
                    priority=priority,
                    category=category,
                    message=message,
                    potential_impact=potential_impact(category, priority),
                )
            )

    items.sort(
        key=lambda item: (
            order.get(item.priority, len(order)),
            -item.potential_impact,
            component_scores.get(_CATEGORY_COMPONENT[item.category], 100),
        )
    )
    return tuple(items[:max_items])
