# src/delivery/crm.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping

import requests

from src.savings.calculator import CalculationMethod, CalculationResult
from src.savings.form import normalized
from src.service.errors import CrmSubmissionError
from src.service.num_utils import round_half_up

log = logging.getLogger(__name__)


def split_name(name: str):
    parts = (name or "").split()
    if not parts:
        return "", ""
    first = parts[0]
    last = " ".join(parts[1:]) or name.strip()
    return first, last


def crm_fields(contact: Mapping[str, Any], form: Mapping[str, Any],
               result: CalculationResult) -> List[Dict[str, str]]:
    """Fixed-shape field list for the HubSpot form."""
    f = normalized(form)
    first, last = split_name(str(contact.get("name") or ""))
    if result.calculation_method is CalculationMethod.SQUARE_METERS:
        size_field = {"name": "total_office_size_m2", "value": str(f["office_size"] or "0")}
        utilization = f["utilization"]
    else:
        size_field = {"name": "current_workstations", "value": str(f["current_workstations"])}
        utilization = f["workstation_utilization"]
    return [
        {"name": "firstname", "value": first},
        {"name": "lastname", "value": last},
        {"name": "email", "value": str(contact.get("email") or "")},
        {"name": "company", "value": str(contact.get("company") or "")},
        {"name": "city", "value": str(contact.get("location") or "")},
        {"name": "organisation_name", "value": str(f["organisation_name"])},
        {"name": "number_of_employees", "value": str(f["number_of_employees"])},
        size_field,
        {"name": "workstation_utilization_percent", "value": str(utilization)},
        {"name": "annual_savings_potential", "value": str(int(round_half_up(result.recoverable_savings)))},
        {"name": "calculation_method", "value": result.calculation_method.value},
    ]


class HubSpotFormClient:
    """Posts leads to a HubSpot form-submission endpoint. The status is returned, never judged."""

    def __init__(self, submit_url: str, timeout: float = 20.0):
        self.submit_url = submit_url
        self.timeout = timeout

    def submit(self, fields: List[Dict[str, str]]) -> int:
        try:
            r = requests.post(self.submit_url, json={"fields": fields},
                              headers={"Content-Type": "application/json"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise CrmSubmissionError(f"CRM submission failed: {e}") from e
        log.info("HubSpot submission response: %s", r.status_code)
        return r.status_code
