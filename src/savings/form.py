# src/savings/form.py
from __future__ import annotations
from typing import Dict, List, Mapping, Any

from src.service.num_utils import to_number, is_blank
from .calculator import (
    AreaInput, CalculationMethod, CalculatorInput, WorkModel, WorkstationInput,
    DEFAULT_COST_PER_WORKSTATION, default_monthly_cost,
)

# Keys of the loose form record posted by the UI
FORM_FIELDS = [
    "calculation_method", "organisation_name", "number_of_employees",
    "current_workstations", "workstation_utilization", "annual_cost_per_workstation",
    "office_size", "monthly_cost", "utilization", "work_model",
]

def method_of(form: Mapping[str, Any]) -> CalculationMethod:
    return CalculationMethod.parse(form.get("calculation_method"))

def build_input(form: Mapping[str, Any]) -> CalculatorInput:
    """Loose form record -> tagged calculator input. Never raises on bad numbers."""
    work_model = WorkModel.parse(form.get("work_model") or WorkModel.HYBRID.value)
    if method_of(form) is CalculationMethod.SQUARE_METERS:
        monthly = form.get("monthly_cost")
        return AreaInput(
            office_size_m2=to_number(form.get("office_size"), 0.0),
            utilization=to_number(form.get("utilization"), 0.0),
            monthly_cost=None if is_blank(monthly) else to_number(monthly, 0.0),
            work_model=work_model,
        )
    return WorkstationInput(
        workstations=to_number(form.get("current_workstations"), 0.0),
        employees=to_number(form.get("number_of_employees"), 0.0),
        utilization=to_number(form.get("workstation_utilization"), 0.0),
        cost_per_workstation=to_number(form.get("annual_cost_per_workstation"), 0.0) or DEFAULT_COST_PER_WORKSTATION,
        work_model=work_model,
    )

def utilization_of(form: Mapping[str, Any]) -> float:
    key = "utilization" if method_of(form) is CalculationMethod.SQUARE_METERS else "workstation_utilization"
    return to_number(form.get(key), 0.0)

def missing_fields(form: Mapping[str, Any]) -> List[str]:
    missing: List[str] = []
    if method_of(form) is CalculationMethod.SQUARE_METERS:
        if is_blank(form.get("monthly_cost")) and default_monthly_cost(form.get("office_size")) <= 0:
            missing.append("monthly_cost")
        if is_blank(form.get("utilization")):
            missing.append("utilization")
    else:
        if is_blank(form.get("workstation_utilization")):
            missing.append("workstation_utilization")
        if is_blank(form.get("current_workstations")) and is_blank(form.get("number_of_employees")):
            missing.append("current_workstations")
    return missing

def out_of_range_fields(form: Mapping[str, Any]) -> List[str]:
    key = "utilization" if method_of(form) is CalculationMethod.SQUARE_METERS else "workstation_utilization"
    if is_blank(form.get(key)):
        return []
    u = utilization_of(form)
    return [] if 0.0 <= u <= 100.0 else [key]

def _as_text(v: Any) -> Any:
    """JSON numbers as form text: 1000.0 -> "1000", 37.5 -> "37.5"."""
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return v
    return str(int(v)) if float(v).is_integer() else str(v)

def normalized(form: Mapping[str, Any]) -> Dict[str, Any]:
    """Form with canonical defaults filled in, as shown in reports and sent to the CRM."""
    out = {k: _as_text(form.get(k)) for k in FORM_FIELDS}
    out["calculation_method"] = method_of(form).value
    out["work_model"] = WorkModel.parse(form.get("work_model") or WorkModel.HYBRID.value).value
    if is_blank(out["current_workstations"]):
        out["current_workstations"] = out["number_of_employees"] if not is_blank(out["number_of_employees"]) else "0"
    for k in ("workstation_utilization", "utilization"):
        if is_blank(out[k]):
            out[k] = "0"
    if is_blank(out["annual_cost_per_workstation"]):
        out["annual_cost_per_workstation"] = str(int(DEFAULT_COST_PER_WORKSTATION))
    for k in ("organisation_name", "number_of_employees", "office_size", "monthly_cost"):
        if out[k] is None:
            out[k] = ""
    return out
