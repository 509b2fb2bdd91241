# src/report/render.py
"""
HTML report and notification email for a savings calculation.

Pure functions: everything needed (contact, form, result, dates, ids) is
passed in, nothing is fetched. User-supplied text is autoescaped by jinja2.
"""
from __future__ import annotations
import re
import random
import string
import unicodedata
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from jinja2 import Environment, BaseLoader, select_autoescape

from src.savings.calculator import (
    CalculationMethod, CalculationResult, WorkModel,
    COST_PER_M2_PER_YEAR, DEFAULT_COST_PER_WORKSTATION, RECOVERY_RATE, TARGET_UTILIZATION,
)
from src.service.num_utils import euros, percent, de_number, to_number, is_blank
from .templates import REPORT_TEMPLATE, EMAIL_TEMPLATE

_ALPHABET = string.ascii_lowercase + string.digits

_env = Environment(loader=BaseLoader(), autoescape=select_autoescape(["html", "xml"], default_for_string=True))
_env.filters["eur"] = euros
_env.filters["pct"] = percent
_env.filters["num"] = de_number
_report_tpl = _env.from_string(REPORT_TEMPLATE)
_email_tpl = _env.from_string(EMAIL_TEMPLATE)


def new_report_id(length: int = 9) -> str:
    return "".join(random.choice(_ALPHABET) for _ in range(length))


def _slug(text: str) -> str:
    ascii_text = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r"[^a-z0-9\s._-]", "", ascii_text.lower())
    return re.sub(r"\s+", "-", cleaned.strip()) or "report"


def report_filename(name: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"savings-report-{_slug(name)}-{today.isoformat()}.html"


def email_subject(result: CalculationResult) -> str:
    return f"Your Flexible Workspace ROI Analysis - {euros(result.recoverable_savings)} Potential Savings"


def _context(contact: Mapping[str, Any], form: Mapping[str, Any], result: CalculationResult,
             report_id: str, today: date, target_utilization: float, brand: str, logo_url: str) -> dict:
    adjusted = result.work_model in (WorkModel.HYBRID, WorkModel.REMOTE)
    by_workstation = result.calculation_method is CalculationMethod.WORKSTATIONS
    custom_cost = not is_blank(form.get("annual_cost_per_workstation")) and \
        to_number(form.get("annual_cost_per_workstation"), 0.0) not in (0.0, DEFAULT_COST_PER_WORKSTATION)
    return {
        "contact": contact,
        "form": form,
        "result": result,
        "report_id": report_id,
        "today": today.strftime("%d/%m/%Y"),
        "brand": brand,
        "logo_url": logo_url,
        "target_utilization": target_utilization,
        "by_workstation": by_workstation,
        "method_label": "Workstation-based Analysis" if by_workstation else "Office Space (M²) Analysis",
        "custom_workstation_cost": custom_cost,
        "adjusted": adjusted,
        "work_model": result.work_model.value,
        "reduction_pct": int(round((1.0 - result.work_model_multiplier) * 100)),
        "recovery_pct": int(round(RECOVERY_RATE * 100)),
        "cost_per_m2": COST_PER_M2_PER_YEAR,
        "step_recover": 5 if adjusted else 4,
    }


def render_report(contact: Mapping[str, Any], form: Mapping[str, Any], result: CalculationResult,
                  report_id: Optional[str] = None, today: Optional[date] = None,
                  target_utilization: float = TARGET_UTILIZATION, brand: str = "Facile",
                  logo_url: str = "") -> str:
    ctx = _context(contact, form, result, report_id or new_report_id(), today or date.today(),
                   target_utilization, brand, logo_url)
    return _report_tpl.render(**ctx)


def render_email(contact: Mapping[str, Any], form: Mapping[str, Any], result: CalculationResult,
                 report_id: str, now: Optional[datetime] = None,
                 target_utilization: float = TARGET_UTILIZATION, brand: str = "Facile") -> str:
    now = now or datetime.now(timezone.utc)
    ctx = _context(contact, form, result, report_id, now.date(), target_utilization, brand, "")
    ctx["generated_at"] = now.isoformat(timespec="seconds")
    return _email_tpl.render(**ctx)
