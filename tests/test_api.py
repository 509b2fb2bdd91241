import pytest
from fastapi.testclient import TestClient

import app.main as main
from src.delivery.crm import crm_fields
from src.service.errors import EmailDeliveryError
from src.service.orchestrator import SubmissionOrchestrator, evaluate_form


class StubMailer:
    def __init__(self, exc=None):
        self.exc, self.calls = exc, []

    def send(self, to, subject, html, attachments=None):
        self.calls.append(to)
        if self.exc:
            raise self.exc
        return "em_9"


@pytest.fixture
def client(monkeypatch, settings):
    mailer = StubMailer()
    monkeypatch.setitem(main.app_state, "settings", settings)
    monkeypatch.setitem(main.app_state, "orchestrator", SubmissionOrchestrator(settings, mailer=mailer))
    c = TestClient(main.app)
    c.mailer = mailer
    return c


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    assert client.get("/healthz").json() == {"status": "healthy"}


def test_meta_defaults(client):
    d = client.get("/meta/defaults").json()
    assert d["calculation_methods"] == ["workstations", "square-meters"]
    assert d["work_models"] == {"office": 1.0, "hybrid": 0.9, "remote": 0.85}
    assert d["default_work_model"] == "hybrid"
    assert d["default_cost_per_workstation"] == 9000


def test_calculate_workstations(client, workstation_form):
    r = client.post("/calculate", json=workstation_form)
    assert r.status_code == 200
    body = r.json()
    assert body["annual_cost"] == pytest.approx(9_000_000)
    assert body["annual_waste"] == pytest.approx(4_050_000)
    assert body["calculation_method"] == "workstations"


def test_calculate_accepts_legacy_m2_and_numbers(client):
    r = client.post("/calculate", json={"calculation_method": "m2", "office_size": 8000, "utilization": 60,
                                        "work_model": "office"})
    assert r.status_code == 200
    assert r.json()["calculation_method"] == "square-meters"
    assert r.json()["annual_cost"] == pytest.approx(433_333 * 12, abs=12)


def test_calculate_missing_fields(client):
    r = client.post("/calculate", json={"calculation_method": "workstations"})
    assert r.status_code == 400
    assert r.json()["detail"]["fields"] == ["workstation_utilization", "current_workstations"]


def test_calculate_out_of_range(client, workstation_form):
    r = client.post("/calculate", json=dict(workstation_form, workstation_utilization="120"))
    assert r.status_code == 400


def test_send_report(client, contact, workstation_form):
    r = client.post("/send-report", json={"contact": contact, "calculator": workstation_form,
                                          "results": {"annual_cost": 1}})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["results"]["annual_cost"] == pytest.approx(9_000_000)
    assert len(body["download_token"]) >= 10
    assert client.mailer.calls == [["ada@example.com", "sales@example.com"]]


def test_send_report_email_failure_still_200(client, monkeypatch, settings, contact, workstation_form):
    orch = SubmissionOrchestrator(settings, mailer=StubMailer(exc=EmailDeliveryError("nope")))
    monkeypatch.setitem(main.app_state, "orchestrator", orch)
    r = client.post("/send-report", json={"contact": contact, "calculator": workstation_form})
    assert r.status_code == 200
    assert r.json()["email_error"] == "nope"


def test_send_report_missing_contact(client, workstation_form):
    r = client.post("/send-report", json={"contact": {"name": "Ada"}, "calculator": workstation_form})
    assert r.status_code == 400
    assert "email" in r.json()["detail"]["fields"]


def test_send_report_without_api_key(client, settings, contact, workstation_form):
    settings.email.api_key = None
    r = client.post("/send-report", json={"contact": contact, "calculator": workstation_form})
    assert r.status_code == 500
    assert "RESEND_API_KEY" in r.json()["detail"]
    assert client.mailer.calls == []


def test_download_report(client, contact, workstation_form):
    token = client.post("/send-report", json={"contact": contact, "calculator": workstation_form}).json()["download_token"]
    r = client.post("/download-report", json={"download_token": token, "contact": contact,
                                              "calculator": workstation_form})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    disp = r.headers["content-disposition"]
    assert disp.startswith('attachment; filename="savings-report-analytical-engines-')
    assert "Workspace Savings Analysis" in r.text


def test_download_report_rejects_short_token(client, contact, workstation_form):
    r = client.post("/download-report", json={"download_token": "abc", "contact": contact,
                                              "calculator": workstation_form})
    assert r.status_code == 401


def test_json_numbers_reach_crm_without_decimals(contact):
    form = main.CalculatorIn(number_of_employees=1000, current_workstations=1000,
                             workstation_utilization=50).model_dump()
    fields = {f["name"]: f["value"] for f in crm_fields(contact, form, evaluate_form(form))}
    assert fields["number_of_employees"] == "1000"
    assert fields["current_workstations"] == "1000"
    assert fields["workstation_utilization_percent"] == "50"
