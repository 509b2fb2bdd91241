from __future__ import annotations
import os, logging
from datetime import date
from typing import Optional, Dict, Any, Union

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, field_validator

from src.savings.calculator import (
    CalculationMethod, WorkModel, WORK_MODEL_MULTIPLIERS,
    DEFAULT_COST_PER_WORKSTATION, COST_PER_M2_PER_YEAR, RECOVERY_RATE,
)
from src.report.render import report_filename
from src.delivery.crm import HubSpotFormClient
from src.service.errors import SubmissionError, ConfigError
from src.service.settings import load_settings
from src.service.orchestrator import (
    SubmissionOrchestrator, evaluate_form, validate_contact, check_download_token,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("savings-api")

SERVICE_NAME = os.getenv("SERVICE_NAME", "workspace-savings-calculator")
SERVICE_STATUS = {"service": SERVICE_NAME, "status": "ok", "docs": "/docs", "openapi": "/openapi.json"}

Num = Optional[Union[float, str]]

def load_state():
    settings = load_settings()
    crm = None
    if settings.crm.enabled and settings.crm.portal_id and settings.crm.form_guid:
        crm = HubSpotFormClient(settings.crm.submit_url, timeout=settings.timeout_seconds)
    return {"settings": settings, "orchestrator": SubmissionOrchestrator(settings, crm=crm)}

app_state: Dict[str, Any] = load_state()
app = FastAPI(title="Workspace Savings Calculator API",
              description="Office-space savings projection, HTML report and email delivery.",
              version="1.0.0")

class CalculatorIn(BaseModel):
    calculation_method: str = CalculationMethod.WORKSTATIONS.value
    organisation_name: Optional[str] = ""
    number_of_employees: Num = None
    current_workstations: Num = None
    workstation_utilization: Num = None
    annual_cost_per_workstation: Num = None
    office_size: Num = None
    monthly_cost: Num = None
    utilization: Num = None
    work_model: str = WorkModel.HYBRID.value
    @field_validator("calculation_method")
    @classmethod
    def norm_method(cls, v: str) -> str: return CalculationMethod.parse(v).value

class ContactIn(BaseModel):
    name: str = ""
    email: str = ""
    company: str = ""
    location: str = ""

class SendReportIn(BaseModel):
    contact: ContactIn
    calculator: CalculatorIn
    results: Optional[Dict[str, Any]] = None   # client preview; recomputed server-side

class DownloadIn(BaseModel):
    download_token: str = ""
    contact: ContactIn
    calculator: CalculatorIn

@app.get("/", tags=["meta"])
def root(): return SERVICE_STATUS

@app.get("/healthz", tags=["meta"])
def healthz(): return {"status": "healthy"}

@app.get("/meta/defaults", tags=["meta"])
def meta_defaults():
    return {
        "calculation_methods": [m.value for m in CalculationMethod],
        "work_models": {m.value: mult for m, mult in WORK_MODEL_MULTIPLIERS.items()},
        "default_work_model": WorkModel.HYBRID.value,
        "default_cost_per_workstation": DEFAULT_COST_PER_WORKSTATION,
        "cost_per_m2_per_year": COST_PER_M2_PER_YEAR,
        "recovery_rate": RECOVERY_RATE,
        "target_utilization": app_state["settings"].report.target_utilization,
    }

@app.post("/calculate", tags=["calculate"])
def calculate_savings(payload: CalculatorIn):
    try:
        result = evaluate_form(payload.model_dump())
        return JSONResponse(result.to_dict())
    except SubmissionError as se:
        raise HTTPException(status_code=400, detail={"message": str(se), "fields": se.fields}) from se
    except Exception as e:
        logger.exception("Calculation failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Calculation failed: {e!s}")

@app.post("/send-report", tags=["report"])
def send_report(payload: SendReportIn):
    orchestrator: SubmissionOrchestrator = app_state["orchestrator"]
    try:
        out = orchestrator.submit(payload.contact.model_dump(), payload.calculator.model_dump())
        return JSONResponse(out)
    except SubmissionError as se:
        raise HTTPException(status_code=400, detail={"message": str(se), "fields": se.fields}) from se
    except ConfigError as ce:
        logger.error("Configuration error: %s", ce)
        raise HTTPException(status_code=500, detail=f"Configuration error: {ce!s}") from ce
    except Exception as e:
        logger.exception("Report submission failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to send report: {e!s}")

@app.post("/download-report", tags=["report"])
def download_report(payload: DownloadIn):
    settings = app_state["settings"]
    if not check_download_token(payload.download_token, settings.min_token_length):
        raise HTTPException(status_code=401, detail="Invalid download token")
    orchestrator: SubmissionOrchestrator = app_state["orchestrator"]
    contact = payload.contact.model_dump(); form = payload.calculator.model_dump()
    try:
        validate_contact(contact)
        result = evaluate_form(form)
        html = orchestrator.render(contact, form, result, report_id=None)
    except SubmissionError as se:
        raise HTTPException(status_code=400, detail={"message": str(se), "fields": se.fields}) from se
    except Exception as e:
        logger.exception("Report download failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to generate report: {e!s}")
    filename = report_filename(contact["company"], date.today())
    return Response(content=html, media_type="text/html; charset=utf-8",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})
