# streamlit_app.py
# Workspace Savings Calculator — preview, lead capture and report download.
#
# Notes:
# - All widgets use unique `key=` values to avoid DuplicateWidgetID.
# - Talks to the FastAPI service (app/main.py): /healthz, /calculate,
#   /send-report, /download-report.
# - If the API is unreachable, the preview falls back to the local calculator
#   so visitors still see numbers; sending the report needs the API.

import os
import json
from datetime import date
from typing import Optional

import requests
import pandas as pd
import streamlit as st

from src.savings.calculator import (
    CalculationMethod, CalculationResult, WorkModel, WORK_MODEL_MULTIPLIERS,
    DEFAULT_COST_PER_WORKSTATION, calculate, default_monthly_cost,
)
from src.savings.form import build_input, missing_fields, out_of_range_fields
from src.report.pdf import build_summary_pdf
from src.report.render import report_filename
from src.service.num_utils import euros, percent

# ---------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------
API_URL = os.getenv("API_URL", "http://127.0.0.1:8000")

METHOD_LABELS = {
    CalculationMethod.WORKSTATIONS.value: "Workstations",
    CalculationMethod.SQUARE_METERS.value: "Office space (m²)",
}
WORK_MODEL_LABELS = {
    WorkModel.OFFICE.value: "Office-based (no adjustment)",
    WorkModel.HYBRID.value: "Hybrid (-10% waste)",
    WorkModel.REMOTE.value: "Remote-first (-15% waste)",
}

# ---------------------------------------------------------------------
# Helpers: API
# ---------------------------------------------------------------------

def _try_get(url: str, timeout: int = 10):
    """GET -> parsed JSON or None (never raises)."""
    try:
        r = requests.get(url, timeout=timeout)
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError):
        return None

def health_status(api_base: str) -> str:
    data = _try_get(f"{api_base}/healthz")
    if isinstance(data, dict):
        return f"API OK • {data}"
    return "Health check failed"

def _result_from_json(data: dict) -> CalculationResult:
    d = dict(data)
    d["calculation_method"] = CalculationMethod.parse(d.get("calculation_method"))
    d["work_model"] = WorkModel.parse(d.get("work_model"))
    return CalculationResult(**d)

def call_calculate(api_base: str, form: dict) -> dict:
    """
    Try the API `/calculate`.
    If it is unreachable, compute locally with the same calculator.
    """
    try:
        r = requests.post(f"{api_base}/calculate", json=form, timeout=15)
        if r.status_code == 200:
            return {"ok": True, "result": _result_from_json(r.json()), "mode": "api"}
        if r.status_code == 400:
            detail = (r.json() or {}).get("detail", {})
            return {"ok": False, "error": detail.get("message") if isinstance(detail, dict) else str(detail), "mode": "api"}
    except (requests.RequestException, ValueError):
        pass

    missing = missing_fields(form) + out_of_range_fields(form)
    if missing:
        return {"ok": False, "error": f"Please check: {', '.join(missing)}", "mode": "local"}
    return {"ok": True, "result": calculate(build_input(form)), "mode": "local"}

def call_send_report(api_base: str, contact: dict, form: dict) -> dict:
    try:
        r = requests.post(f"{api_base}/send-report", json={"contact": contact, "calculator": form}, timeout=60)
        data = r.json() if r.headers.get("content-type", "").startswith("application/json") else json.loads(r.text)
        if r.status_code != 200:
            detail = data.get("detail") if isinstance(data, dict) else data
            if isinstance(detail, dict):
                detail = detail.get("message")
            return {"ok": False, "error": str(detail)}
        return {"ok": True, "data": data}
    except (requests.RequestException, ValueError) as e:
        return {"ok": False, "error": str(e)}

def call_download_report(api_base: str, token: str, contact: dict, form: dict) -> Optional[bytes]:
    try:
        r = requests.post(f"{api_base}/download-report",
                          json={"download_token": token, "contact": contact, "calculator": form}, timeout=30)
        r.raise_for_status()
        return r.content
    except requests.RequestException:
        return None

def comparison_frame(result: CalculationResult) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Scenario": "Current", "Annual cost (€)": result.annual_cost},
         {"Scenario": "Optimized", "Annual cost (€)": result.optimized_cost}]
    ).set_index("Scenario")

# ---------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------
st.set_page_config(page_title="Workspace Savings Calculator", page_icon="🏢", layout="wide")
st.title("🏢 Workspace Savings Calculator")

with st.sidebar:
    st.subheader("Backend")
    api_input = st.text_input("API URL", value=API_URL, key="sb_api_url")
    if api_input != API_URL:
        API_URL = api_input
    st.divider()
    msg = health_status(API_URL)
    if msg.startswith("API OK"):
        st.success(msg)
    else:
        st.error(msg)

tabs = st.tabs(["Calculator", "About"])

# ---------------------------------------------------------------------
# Calculator Tab
# ---------------------------------------------------------------------
with tabs[0]:
    method = st.radio("Calculate by", options=list(METHOD_LABELS), format_func=METHOD_LABELS.get,
                      horizontal=True, key="calc_method")

    c1, c2 = st.columns(2)
    with c1:
        organisation = st.text_input("Organisation name", key="calc_org")
    with c2:
        employees = st.text_input("Number of employees", placeholder="1000", key="calc_employees")

    form = {
        "calculation_method": method,
        "organisation_name": organisation,
        "number_of_employees": employees,
    }

    if method == CalculationMethod.WORKSTATIONS.value:
        w1, w2, w3 = st.columns(3)
        with w1:
            form["current_workstations"] = st.text_input("Current workstations", placeholder=employees or "1000", key="calc_ws")
        with w2:
            form["workstation_utilization"] = st.text_input("Workstation utilization (%)", placeholder="50", key="calc_ws_util")
        with w3:
            form["annual_cost_per_workstation"] = st.text_input("Annual cost per workstation (€)",
                                                                value=str(int(DEFAULT_COST_PER_WORKSTATION)), key="calc_ws_cost")
    else:
        a1, a2, a3 = st.columns(3)
        with a1:
            office_size = st.text_input("Total office size (m²)", placeholder="8000", key="calc_size")
        derived = default_monthly_cost(office_size)
        with a2:
            monthly = st.text_input("Monthly cost (€)", value="", placeholder=f"{derived:.0f}" if derived else "",
                                    help="Auto-calculated at €650/m²/year. You can override this value.", key="calc_monthly")
        with a3:
            form["utilization"] = st.text_input("Space utilization (%)", placeholder="60", key="calc_util")
        form["office_size"] = office_size
        form["monthly_cost"] = monthly

    form["work_model"] = st.selectbox("Working arrangement", options=list(WORK_MODEL_LABELS),
                                      index=list(WORK_MODEL_LABELS).index(WorkModel.HYBRID.value),
                                      format_func=WORK_MODEL_LABELS.get, key="calc_work_model")

    if st.button("Calculate savings", type="primary", key="calc_btn"):
        res = call_calculate(API_URL, form)
        if not res.get("ok"):
            st.error(res.get("error", "Calculation failed"))
        else:
            st.session_state["result"] = res["result"]
            st.session_state["form"] = dict(form)
            st.session_state.pop("download_token", None)
            if res.get("mode") == "local":
                st.info("API unreachable; showing a local preview.")

    result: Optional[CalculationResult] = st.session_state.get("result")
    if result is not None:
        m = st.columns(4)
        m[0].metric("Annual cost", euros(result.annual_cost))
        m[1].metric("Annual waste", euros(result.annual_waste))
        m[2].metric("Potential savings", euros(result.recoverable_savings))
        m[3].metric("Cost reduction", percent(result.cost_cut_percentage))
        st.caption(f"Monthly waste: {euros(result.monthly_waste)} • work-model multiplier "
                   f"{WORK_MODEL_MULTIPLIERS[result.work_model]:.2f} • 75% of waste treated as recoverable")
        st.bar_chart(comparison_frame(result))

        st.subheader("📧 Get the full report")
        with st.form("contact_form", clear_on_submit=False):
            f1, f2 = st.columns(2)
            name = f1.text_input("Full name", key="ct_name")
            email = f2.text_input("Email", key="ct_email")
            company = f1.text_input("Company", key="ct_company")
            location = f2.text_input("City", key="ct_location")
            submitted = st.form_submit_button("Send me the report", type="primary")
        contact = {"name": name, "email": email, "company": company, "location": location}

        if submitted:
            if not all(v.strip() for v in contact.values()):
                st.error("Please fill in all contact fields.")
            else:
                with st.spinner("Generating and sending your report..."):
                    out = call_send_report(API_URL, contact, st.session_state["form"])
                if not out.get("ok"):
                    st.error(f"Request failed: {out.get('error', 'Unknown error')}")
                else:
                    data = out["data"]
                    st.session_state["download_token"] = data.get("download_token")
                    st.session_state["contact"] = contact
                    if data.get("email_error"):
                        st.warning(f"{data.get('message')} ({data['email_error']}). You can still download it below.")
                    else:
                        st.success(f"Report sent to {email}.")

        token = st.session_state.get("download_token")
        if token:
            saved_contact = st.session_state.get("contact", contact)
            d1, d2 = st.columns(2)
            with d1:
                html = call_download_report(API_URL, token, saved_contact, st.session_state["form"])
                if html:
                    st.download_button("📄 Download HTML report", data=html,
                                       file_name=report_filename(saved_contact.get("company") or "", date.today()),
                                       mime="text/html", key="dl_html")
                else:
                    st.error("Report download failed. Please try again.")
            with d2:
                st.download_button("🧾 Download PDF summary", data=build_summary_pdf(saved_contact, result),
                                   file_name=f"savings-summary-{date.today().isoformat()}.pdf",
                                   mime="application/pdf", key="dl_pdf")

# ---------------------------------------------------------------------
# About Tab
# ---------------------------------------------------------------------
with tabs[1]:
    st.subheader("About")
    st.markdown("""
- **Workstations**: annual cost = workstations × cost per workstation (default €9,000; workstation count falls back to employees).
- **Office space**: annual cost = monthly cost × 12; monthly cost defaults to size × €650 / 12.
- Waste = annual cost × (100 − utilization)%, reduced by 10% for hybrid and 15% for remote work.
- 75% of the waste is treated as recoverable; the savings percentage is recoverable ÷ annual cost.
- Backend endpoints: `GET /healthz`, `GET /meta/defaults`, `POST /calculate`, `POST /send-report`, `POST /download-report`
""")
