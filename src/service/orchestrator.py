# src/service/orchestrator.py
"""
Submission flow for a calculator lead:

  validate -> calculate -> CRM (best effort) -> render report -> email -> token

Only a malformed request or a broken configuration fails the submission.
CRM problems are logged; an email failure still returns success with
`email_error` set, since the calculation and the report already exist.
"""
from __future__ import annotations
import logging
import secrets
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from src.savings.calculator import calculate, CalculationResult
from src.savings.form import build_input, missing_fields, out_of_range_fields, normalized
from src.report.render import render_report, render_email, email_subject, report_filename, new_report_id
from src.delivery.email import ResendClient, html_attachment
from src.delivery.crm import HubSpotFormClient, crm_fields
from .errors import SubmissionError, EmailDeliveryError, CrmSubmissionError
from .settings import Settings, require_api_key

log = logging.getLogger(__name__)

CONTACT_FIELDS = ["name", "email", "company", "location"]


def issue_download_token() -> str:
    return secrets.token_urlsafe(12)


def check_download_token(token: Optional[str], min_length: int = 10) -> bool:
    """Length check only: the token is a convenience, not authentication."""
    return bool(token) and len(token) >= min_length


def validate_form(form: Mapping[str, Any]) -> None:
    missing = missing_fields(form)
    if missing:
        raise SubmissionError(f"Missing required calculator fields: {', '.join(missing)}", missing)
    bad = out_of_range_fields(form)
    if bad:
        raise SubmissionError(f"Utilization must be between 0 and 100: {', '.join(bad)}", bad)


def validate_contact(contact: Mapping[str, Any]) -> None:
    missing = [k for k in CONTACT_FIELDS if not str(contact.get(k) or "").strip()]
    if missing:
        raise SubmissionError(f"Missing required contact fields: {', '.join(missing)}", missing)


def evaluate_form(form: Mapping[str, Any]) -> CalculationResult:
    validate_form(form)
    return calculate(build_input(form))


class SubmissionOrchestrator:
    def __init__(self, settings: Settings, crm: Optional[HubSpotFormClient] = None,
                 mailer: Optional[ResendClient] = None):
        self.settings = settings
        self.crm = crm
        self.mailer = mailer

    def _mailer(self) -> ResendClient:
        key = require_api_key(self.settings)
        if self.mailer is None:
            self.mailer = ResendClient(key, self.settings.email.sender,
                                       api_url=self.settings.email.api_url,
                                       timeout=self.settings.timeout_seconds)
        return self.mailer

    def _post_lead(self, contact, form, result) -> Optional[int]:
        if self.crm is None:
            return None
        try:
            return self.crm.submit(crm_fields(contact, form, result))
        except CrmSubmissionError as e:
            log.warning("CRM submission failed, continuing: %s", e)
            return None

    def recipients(self, contact: Mapping[str, Any]) -> List[str]:
        out = [str(contact["email"]).strip()]
        for r in self.settings.email.internal_recipients:
            if r and r not in out:
                out.append(r)
        return out

    def render(self, contact, form, result, report_id: Optional[str] = None, today: Optional[date] = None) -> str:
        rs = self.settings.report
        return render_report(contact, normalized(form), result, report_id=report_id, today=today,
                             target_utilization=rs.target_utilization, brand=rs.brand, logo_url=rs.logo_url)

    def submit(self, contact: Mapping[str, Any], form: Mapping[str, Any]) -> Dict[str, Any]:
        validate_contact(contact)
        result = evaluate_form(form)
        mailer = self._mailer()   # ConfigError surfaces before any side effect

        crm_status = self._post_lead(contact, form, result)

        report_id = new_report_id()
        html = self.render(contact, form, result, report_id)
        filename = report_filename(str(contact.get("name") or ""))
        out: Dict[str, Any] = {
            "success": True,
            "report_id": report_id,
            "filename": filename,
            "download_token": issue_download_token(),
            "crm_status": crm_status,
            "results": result.to_dict(),
        }
        try:
            out["email_id"] = mailer.send(
                self.recipients(contact),
                email_subject(result),
                render_email(contact, normalized(form), result, report_id,
                             target_utilization=self.settings.report.target_utilization,
                             brand=self.settings.report.brand),
                attachments=[html_attachment(filename, html)],
            )
        except EmailDeliveryError as e:
            log.error("Email delivery failed for report %s: %s", report_id, e)
            out["message"] = "Report generated successfully, but email delivery failed"
            out["email_error"] = str(e)
            return out
        out["message"] = "Report sent successfully"
        return out
