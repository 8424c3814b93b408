import random
from typing import Dict, List

__all__ = ["HEALTH_TIPS", "get_tip_category", "get_daily_tip"]

HEALTH_TIPS: Dict[str, List[str]] = {
    "default": [
        "Remember to take medications with water",
        "Store medications in a cool, dry place",
        "Keep track of your medication schedule",
    ],
    "antibiotics": [
        "Complete the full course of antibiotics",
        "Take at regular intervals as prescribed",
    ],
}


def get_tip_category(medication_name: str | None) -> str:
    if "antibiotic" in (medication_name or "").lower():
        return "antibiotics"
    return "default"


def get_daily_tip(medication_name: str | None, rng: random.Random | None = None) -> str:
    """按药名归类，在类别内随机挑一条健康提示"""
    tips = HEALTH_TIPS[get_tip_category(medication_name)]
    return (rng or random).choice(tips)
