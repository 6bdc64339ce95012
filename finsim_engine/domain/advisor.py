"""Advice request payloads - plain, serializable snapshots for the text-generation service"""

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional
from finsim_engine.domain.models import FinancialState
from finsim_engine.domain.cashflow import aggregate_monthly_flow
from finsim_engine.domain.risk import assess_risk
from finsim_engine.domain.scenario import compare_scenarios

SYSTEM_INSTRUCTION = (
    "You are a world-class financial advisor and data analyst. "
    "Your goal is to analyze financial states and provide actionable, concise advice. "
    "When comparing a simulation to a current state, highlight the specific trade-offs "
    "(e.g., long-term cost of interest vs short-term liquidity). "
    "Keep tone professional but encouraging."
)


def to_plain(value: Any) -> Any:
    """Convert dataclasses, enums and dates into JSON-ready builtins"""
    if is_dataclass(value) and not isinstance(value, type):
        return to_plain(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def _describe(state: FinancialState) -> Dict[str, Any]:
    return {
        "state": to_plain(state),
        "flow": to_plain(aggregate_monthly_flow(state)),
        "risk": to_plain(assess_risk(state)),
    }


def build_advisor_payload(
    current: FinancialState,
    simulated: Optional[FinancialState] = None,
    horizon_months: int = 12,
) -> Dict[str, Any]:
    """
    Build the request body for a financial analysis.

    Without a simulated state the payload asks for a plain health check
    ("analysis"); with one it asks for a comparison and carries the
    scenario impact over horizon_months.
    """
    payload: Dict[str, Any] = {
        "mode": "comparison" if simulated is not None else "analysis",
        "current": _describe(current),
    }

    if simulated is not None:
        _, _, impact = compare_scenarios(current, simulated, horizon_months)
        payload["simulated"] = _describe(simulated)
        payload["impact"] = to_plain(impact)
        payload["horizon_months"] = horizon_months

    payload["prompt"] = build_advisor_prompt(payload)
    payload["system_instruction"] = SYSTEM_INSTRUCTION
    return payload


def build_advisor_prompt(payload: Dict[str, Any]) -> str:
    current = json.dumps(payload["current"]["state"])

    if payload["mode"] == "comparison":
        simulated = json.dumps(payload["simulated"]["state"])
        return (
            "Compare these two financial states.\n"
            f"Current State: {current}\n"
            f"Simulated State (Proposed Changes): {simulated}\n\n"
            "Provide:\n"
            "1. A summary of the impact of the changes in the simulation.\n"
            "2. Specific pros/cons or recommendations.\n"
            "3. A financial health score (0-100) for the simulated scenario."
        )

    return (
        f"Analyze this current financial state: {current}\n\n"
        "Provide:\n"
        "1. A summary of current spending and health.\n"
        "2. 3 actionable recommendations to improve savings or reduce debt.\n"
        "3. A financial health score (0-100)."
    )
