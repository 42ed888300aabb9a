# halaleco/rules/ingredients.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Sequence, Tuple

from .tables import HARAM_INGREDIENTS, MUSHBOOH_INGREDIENTS, INGREDIENT_ALTERNATIVES

Status = Literal["halal", "haram", "mushbooh", "unknown"]


@dataclass(frozen=True)
class IngredientFinding:
    ingredient: str
    status: Status
    reason: str
    alternatives: Tuple[str, ...] | None = field(default=None)

    def to_dict(self) -> dict:
        out = {"ingredient": self.ingredient, "status": self.status, "reason": self.reason}
        if self.alternatives is not None:
            out["alternatives"] = list(self.alternatives)
        return out


def _first_match(text: str, candidates: Iterable[str]) -> str | None:
    for c in candidates:
        if c.lower() in text:
            return c
    return None


def ingredient_alternatives(ingredient: str) -> Tuple[str, ...]:
    key = ingredient.lower()
    if key in INGREDIENT_ALTERNATIVES:
        return INGREDIENT_ALTERNATIVES[key]
    return (f"Halal-certified {ingredient}", f"Plant-based {ingredient}")


def classify_one(ingredient: str) -> IngredientFinding:
    lowered = (ingredient or "").strip().lower()
    if not lowered:
        return IngredientFinding(ingredient, "unknown", "Empty ingredient name")

    haram = _first_match(lowered, HARAM_INGREDIENTS)
    if haram:
        return IngredientFinding(
            ingredient,
            "haram",
            f"Contains {haram} which is prohibited in Islam",
            ingredient_alternatives(haram),
        )

    doubtful = _first_match(lowered, MUSHBOOH_INGREDIENTS)
    if doubtful:
        return IngredientFinding(
            ingredient,
            "mushbooh",
            f"{doubtful} requires verification of source and processing method",
            ingredient_alternatives(doubtful),
        )

    return IngredientFinding(ingredient, "halal", "No prohibited substances detected")


def classify(ingredients: Sequence[str]) -> List[IngredientFinding]:
    """Classify each ingredient, preserving input order. Pure: same list in, same findings out."""
    return [classify_one(i) for i in ingredients]


def with_status(findings: Iterable[IngredientFinding], status: Status) -> List[IngredientFinding]:
    return [f for f in findings if f.status == status]
