"""Rate conversion utilities"""

import re
from typing import Optional


def monthly_rate(annual_rate_percent: float) -> float:
    """Convert an annual percent rate (6.5) to a monthly fraction (0.0054166...)"""
    return annual_rate_percent / 100 / 12


def parse_percent_range(text: str) -> Optional[float]:
    """
    Read a percent figure out of free text.

    "8-10%" -> 9.0 (midpoint), "7.5%" -> 7.5, "n/a" -> None
    """
    nums = re.findall(r"\d+\.?\d*", text or "")
    if not nums:
        return None
    if len(nums) == 2:
        return (float(nums[0]) + float(nums[1])) / 2
    return float(nums[0])
