import re
from datetime import date, datetime, timezone

import pytest

from src.report.pdf import build_summary_pdf
from src.report.render import email_subject, new_report_id, render_email, render_report, report_filename
from src.savings.calculator import calculate
from src.savings.form import build_input, normalized
from src.service.num_utils import round_half_up

FIELD_RE = re.compile(r'data-field="(\w+)">([^<]+)<')


def _parse_fields(html):
    out = {}
    for key, text in FIELD_RE.findall(html):
        text = text.strip()
        if text.endswith("%"):
            out[key] = float(text[:-1])
        elif text.endswith("€"):
            out[key] = int(text.replace("€", "").replace("\u00a0", "").replace(".", "").strip())
        else:
            out[key] = text
    return out


def _render(contact, form, **kw):
    result = calculate(build_input(form))
    html = render_report(contact, normalized(form), result, report_id="abc123xyz", today=date(2025, 3, 1), **kw)
    return result, html


def test_report_numbers_round_trip(contact, workstation_form):
    result, html = _render(contact, workstation_form)
    fields = _parse_fields(html)
    assert fields["annual_cost"] == round_half_up(result.annual_cost) == 9_000_000
    assert fields["annual_waste"] == round_half_up(result.annual_waste) == 4_050_000
    assert fields["monthly_waste"] == round_half_up(result.monthly_waste) == 337_500
    assert fields["recoverable_savings"] == round_half_up(result.recoverable_savings) == 3_037_500
    assert fields["optimized_cost"] == round_half_up(result.optimized_cost)
    assert fields["cost_cut_percentage"] == pytest.approx(result.cost_cut_percentage, abs=0.051)
    assert fields["report_id"] == "abc123xyz"


def test_hybrid_report_has_adjustment_step(contact, workstation_form):
    _, html = _render(contact, workstation_form)
    assert "Step 4: Working Arrangement Adjustment" in html
    assert "× 0.90 = 4.050.000" in html
    assert "Step 5: Recoverable Savings" in html
    assert "Step 6: Savings Percentage" in html
    assert "Step 7: Financial Impact Summary" in html
    assert "1.000 workstations × 9.000" in html
    assert "100% - 50% = 50%" in html
    assert "01/03/2025" in html


def test_office_report_skips_adjustment_step(contact, area_form):
    result, html = _render(contact, area_form)
    assert "Working Arrangement Adjustment" not in html
    assert "Step 4: Recoverable Savings" in html
    assert "Office Space (M²) Analysis" in html
    assert "433.333" in html
    assert result.monthly_cost == 433_333


def test_report_escapes_user_text(workstation_form):
    evil = {"name": "<b>x</b>", "email": "x@example.com", "company": "<script>alert(1)</script>", "location": "A&B"}
    _, html = _render(evil, workstation_form)
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "A&amp;B" in html


def test_report_mentions_custom_workstation_cost(contact, workstation_form):
    form = dict(workstation_form, annual_cost_per_workstation="12000")
    _, html = _render(contact, form)
    assert "your specified" in html
    _, html = _render(contact, workstation_form)
    assert "an industry-standard" in html


def test_report_brand_and_target(contact, workstation_form):
    _, html = _render(contact, workstation_form, brand="Acme Spaces", target_utilization=90, logo_url="https://x/logo.png")
    assert "By implementing Acme Spaces" in html
    assert "&rarr; 90%" in html
    assert 'src="https://x/logo.png"' in html


def test_email_body_and_subject(contact, workstation_form):
    result = calculate(build_input(workstation_form))
    body = render_email(contact, normalized(workstation_form), result, "rid42",
                        now=datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc))
    assert "Report ID: rid42" in body
    assert "Analytical Engines" in body
    assert "2025-03-01T12:00:00+00:00" in body
    assert email_subject(result) == "Your Flexible Workspace ROI Analysis - 3.037.500\u00a0€ Potential Savings"


def test_report_filename_and_ids():
    assert report_filename("Ada  Lovelace", date(2025, 1, 2)) == "savings-report-ada-lovelace-2025-01-02.html"
    assert report_filename("Müller & Co", date(2025, 1, 2)) == "savings-report-muller-co-2025-01-02.html"
    assert report_filename("", date(2025, 1, 2)) == "savings-report-report-2025-01-02.html"
    rid = new_report_id()
    assert len(rid) == 9 and rid.isalnum()


def test_summary_pdf(contact, area_form):
    pdf = build_summary_pdf(contact, calculate(build_input(area_form)))
    assert pdf.startswith(b"%PDF")
