import json

import pytest
import requests

from src.service.settings import Settings, EmailSettings, CrmSettings


def make_response(status_code=200, payload=None, text=""):
    """Real requests.Response with a canned body; `payload` is sent as JSON."""
    r = requests.models.Response()
    r.status_code = status_code
    if payload is not None:
        r._content = json.dumps(payload).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    else:
        r._content = text.encode("utf-8")
    r.encoding = "utf-8"
    return r


class PostRecorder:
    """Stand-in for requests.post that records calls and replays responses."""

    def __init__(self, response=None, exc=None):
        self.response = response if response is not None else make_response(200, {"id": "msg_1"})
        self.exc = exc
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        return self.response


@pytest.fixture
def settings():
    return Settings(
        email=EmailSettings(sender="reports@example.com", internal_recipients=["sales@example.com"],
                            api_key="re_test_key"),
        crm=CrmSettings(portal_id="123", form_guid="abc"),
    )


@pytest.fixture
def contact():
    return {"name": "Ada Lovelace", "email": "ada@example.com", "company": "Analytical Engines", "location": "London"}


@pytest.fixture
def workstation_form():
    return {
        "calculation_method": "workstations",
        "number_of_employees": "1000",
        "current_workstations": "1000",
        "workstation_utilization": "50",
        "annual_cost_per_workstation": "9000",
        "work_model": "hybrid",
    }


@pytest.fixture
def area_form():
    return {
        "calculation_method": "square-meters",
        "office_size": "8000",
        "monthly_cost": "",
        "utilization": "60",
        "work_model": "office",
    }


@pytest.fixture
def fake_response():
    return make_response


@pytest.fixture
def recorder():
    return PostRecorder
