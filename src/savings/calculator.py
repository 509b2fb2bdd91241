# src/savings/calculator.py
"""
Workspace savings calculator.

Five ordered steps, shared by both calculation methods:
  1. base annual cost (workstations x cost, or monthly cost x 12)
  2. waste factor = (100 - utilization) / 100
  3. work-model multiplier on the waste (office 1.0, hybrid 0.90, remote 0.85)
  4. recoverable savings = waste x 0.75
  5. savings percentage = recoverable / annual cost x 100

Pure functions only; no I/O. Numbers coming from forms are coerced with
`to_number`, so blanks and garbage count as 0 instead of raising.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional, Union

from src.service.num_utils import to_number, round_half_up

DEFAULT_COST_PER_WORKSTATION = 9000.0   # EUR per workstation per year
COST_PER_M2_PER_YEAR = 650.0            # EUR per m² per year
RECOVERY_RATE = 0.75
TARGET_UTILIZATION = 85.0


class CalculationMethod(str, Enum):
    WORKSTATIONS = "workstations"
    SQUARE_METERS = "square-meters"

    @classmethod
    def parse(cls, value) -> "CalculationMethod":
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().lower()
        if s in {"m2", "m²", "square-meters", "square_meters", "area"}:
            return cls.SQUARE_METERS
        return cls.WORKSTATIONS


class WorkModel(str, Enum):
    OFFICE = "office"
    HYBRID = "hybrid"
    REMOTE = "remote"

    @classmethod
    def parse(cls, value) -> "WorkModel":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.OFFICE


WORK_MODEL_MULTIPLIERS: Dict[WorkModel, float] = {
    WorkModel.OFFICE: 1.0,
    WorkModel.HYBRID: 0.90,
    WorkModel.REMOTE: 0.85,
}


@dataclass(frozen=True)
class WorkstationInput:
    workstations: float = 0.0
    utilization: float = 0.0
    cost_per_workstation: float = DEFAULT_COST_PER_WORKSTATION
    work_model: WorkModel = WorkModel.HYBRID
    employees: float = 0.0

    method = CalculationMethod.WORKSTATIONS


@dataclass(frozen=True)
class AreaInput:
    office_size_m2: float = 0.0
    utilization: float = 0.0
    monthly_cost: Optional[float] = None   # None -> derived from office size
    work_model: WorkModel = WorkModel.HYBRID

    method = CalculationMethod.SQUARE_METERS


CalculatorInput = Union[WorkstationInput, AreaInput]


@dataclass(frozen=True)
class CalculationResult:
    annual_cost: float
    annual_waste: float
    monthly_waste: float
    cost_cut_percentage: float
    calculation_method: CalculationMethod
    # intermediates, kept so the report can show every step with real numbers
    utilization: float = 0.0
    waste_factor: float = 0.0
    raw_annual_waste: float = 0.0
    work_model: WorkModel = WorkModel.OFFICE
    work_model_multiplier: float = 1.0
    recoverable_savings: float = 0.0
    optimized_cost: float = 0.0
    workstations: float = 0.0
    cost_per_workstation: float = 0.0
    office_size_m2: float = 0.0
    monthly_cost: float = 0.0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["calculation_method"] = self.calculation_method.value
        d["work_model"] = self.work_model.value
        return d


def default_monthly_cost(office_size_m2) -> float:
    """€650 per m² per year, spread over 12 months, rounded to whole euros."""
    size = to_number(office_size_m2, 0.0)
    if size <= 0:
        return 0.0
    return round_half_up(size * COST_PER_M2_PER_YEAR / 12)


def work_model_multiplier(work_model) -> float:
    return WORK_MODEL_MULTIPLIERS[WorkModel.parse(work_model)]


def _finish(annual_cost: float, utilization: float, work_model: WorkModel,
            method: CalculationMethod, **base) -> CalculationResult:
    """Steps 2-5, identical for both methods."""
    waste_factor = (100.0 - utilization) / 100.0
    raw_waste = annual_cost * waste_factor
    multiplier = WORK_MODEL_MULTIPLIERS[work_model]
    annual_waste = raw_waste * multiplier
    recoverable = annual_waste * RECOVERY_RATE
    pct = (recoverable / annual_cost) * 100.0 if annual_cost else 0.0
    return CalculationResult(
        annual_cost=annual_cost,
        annual_waste=annual_waste,
        monthly_waste=annual_waste / 12.0,
        cost_cut_percentage=pct,
        calculation_method=method,
        utilization=utilization,
        waste_factor=waste_factor,
        raw_annual_waste=raw_waste,
        work_model=work_model,
        work_model_multiplier=multiplier,
        recoverable_savings=recoverable,
        optimized_cost=annual_cost - recoverable,
        **base,
    )


def evaluate_workstations(inp: WorkstationInput) -> CalculationResult:
    workstations = to_number(inp.workstations, 0.0) or to_number(inp.employees, 0.0)
    cost = to_number(inp.cost_per_workstation, 0.0) or DEFAULT_COST_PER_WORKSTATION
    utilization = to_number(inp.utilization, 0.0)
    return _finish(
        workstations * cost, utilization, WorkModel.parse(inp.work_model),
        CalculationMethod.WORKSTATIONS,
        workstations=workstations, cost_per_workstation=cost,
    )


def evaluate_area(inp: AreaInput) -> CalculationResult:
    size = to_number(inp.office_size_m2, 0.0)
    if inp.monthly_cost is None:
        monthly = default_monthly_cost(size)
    else:
        monthly = to_number(inp.monthly_cost, 0.0)
    utilization = to_number(inp.utilization, 0.0)
    return _finish(
        monthly * 12.0, utilization, WorkModel.parse(inp.work_model),
        CalculationMethod.SQUARE_METERS,
        office_size_m2=size, monthly_cost=monthly,
    )


_EVALUATORS = {
    WorkstationInput: evaluate_workstations,
    AreaInput: evaluate_area,
}


def calculate(inp: CalculatorInput) -> CalculationResult:
    try:
        evaluate = _EVALUATORS[type(inp)]
    except KeyError:
        raise TypeError(f"Unsupported calculator input: {type(inp).__name__}") from None
    return evaluate(inp)
