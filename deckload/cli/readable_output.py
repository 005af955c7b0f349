"""
Helpers to turn a mission report dict into a compact, human-readable
console summary.
"""

from __future__ import annotations

from typing import Any

from deckload.models.results import LoadConstraintType
from deckload.units import CONCENTRATED_LOAD_UNIT, RUNNING_LOAD_UNIT, WEIGHT_UNIT


def _fmt_float(value: Any, unit: str = "", zero_default: str = "n/a") -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return zero_default
    suffix = f" {unit}" if unit else ""
    if abs(fval) >= 1000:
        return f"{fval:,.0f}{suffix}"
    return f"{fval:.2f}{suffix}"


def _fmt_limit(current: Any, limit: Any, unit: str) -> str:
    if limit is None:
        return f"{_fmt_float(current, unit)} (no limit)"
    return f"{_fmt_float(current, unit)} / {_fmt_float(limit, unit)}"


_UNITS = {
    LoadConstraintType.CUMULATIVE: WEIGHT_UNIT,
    LoadConstraintType.CONCENTRATED: CONCENTRATED_LOAD_UNIT,
    LoadConstraintType.RUNNING: RUNNING_LOAD_UNIT,
}


def _print_floor_section(floor: dict[str, Any], failures_only: bool) -> None:
    """Render floor-load results grouped by check type."""
    results = floor.get("results") or []
    print(f"Floor loads: {floor.get('overall_status', '?')} ({len(results)} checks)")

    for check in LoadConstraintType:
        rows = [r for r in results if r.get("constraint_type") == check.value]
        if failures_only:
            rows = [r for r in rows if r.get("status") == "FAIL"]
        if not rows:
            continue
        print(f"  {check.value.capitalize()}:")
        for r in rows:
            item = f" item {r['cargo_item_id']}" if r.get("cargo_item_id") is not None else ""
            category = f" [{r['load_category']}]" if r.get("load_category") else ""
            name = r.get("compartment_name") or r.get("compartment_id")
            line = (
                f"    {r.get('status', '?'):4} {name}{item}{category}: "
                f"{_fmt_limit(r.get('current_load'), r.get('max_allowed_load'), _UNITS[check])}"
            )
            if r.get("overage_amount"):
                line += f" (over by {_fmt_float(r['overage_amount'], _UNITS[check])})"
            print(line)


def print_readable_report(data: dict[str, Any], failures_only: bool = False) -> None:
    """
    Print a human-friendly summary of a mission report.

    Args:
        data: Report as produced by MissionReport.model_dump(mode="json").
        failures_only: Only list failed floor-load checks.
    """
    balance = data.get("weight_and_balance", {})
    mac = data.get("mac_validation", {})

    print(f"Mission: {data.get('mission_name', '?')} (#{data.get('mission_id', '?')}) | "
          f"Aircraft: {data.get('aircraft_name', '?')}")
    print(
        f"Weight: {_fmt_float(balance.get('total_weight'), 'lbs')} | "
        f"CG: {_fmt_float(balance.get('cg'), 'in')} | "
        f"MAC: {_fmt_float(balance.get('mac_percent'), '%')}"
    )
    print(
        f"  Index: cargo {_fmt_float(balance.get('cargo_index'))}, "
        f"additional {_fmt_float(balance.get('additional_weights_index'))}, "
        f"fuel {_fmt_float(balance.get('fuel_index'))}, "
        f"empty {_fmt_float(balance.get('empty_aircraft_index'))}, "
        f"total {_fmt_float(balance.get('total_index'))}"
    )
    print(f"MAC check: {'PASS' if mac.get('is_valid') else 'FAIL'} - {mac.get('message', '')}")

    _print_floor_section(data.get("floor_validation", {}), failures_only)

    warnings = data.get("warnings") or []
    if warnings:
        print("Warnings:")
        for w in warnings:
            print(f"  - {w}")
