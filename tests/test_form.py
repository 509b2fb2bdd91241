from src.savings.calculator import AreaInput, WorkModel, WorkstationInput
from src.savings.form import build_input, missing_fields, normalized, out_of_range_fields


def test_build_workstation_input(workstation_form):
    inp = build_input(workstation_form)
    assert isinstance(inp, WorkstationInput)
    assert inp.workstations == 1000
    assert inp.utilization == 50
    assert inp.work_model is WorkModel.HYBRID


def test_build_area_input_keeps_blank_monthly_cost_unset(area_form):
    inp = build_input(area_form)
    assert isinstance(inp, AreaInput)
    assert inp.monthly_cost is None
    assert inp.office_size_m2 == 8000


def test_legacy_m2_method_and_default_work_model():
    inp = build_input({"calculation_method": "m2", "monthly_cost": "1000", "utilization": "50"})
    assert isinstance(inp, AreaInput)
    assert inp.monthly_cost == 1000
    assert inp.work_model is WorkModel.HYBRID


def test_missing_fields_workstations():
    assert missing_fields({"calculation_method": "workstations"}) == ["workstation_utilization", "current_workstations"]
    assert missing_fields({"workstation_utilization": "50", "number_of_employees": "20"}) == []


def test_missing_fields_area(area_form):
    assert missing_fields(area_form) == []
    assert missing_fields({"calculation_method": "square-meters", "utilization": "50"}) == ["monthly_cost"]
    assert missing_fields({"calculation_method": "square-meters", "monthly_cost": "900"}) == ["utilization"]


def test_out_of_range_fields():
    assert out_of_range_fields({"workstation_utilization": "101"}) == ["workstation_utilization"]
    assert out_of_range_fields({"workstation_utilization": "-1"}) == ["workstation_utilization"]
    assert out_of_range_fields({"calculation_method": "square-meters", "utilization": "100"}) == []
    assert out_of_range_fields({}) == []


def test_normalized_fills_canonical_defaults():
    f = normalized({"calculation_method": "workstations", "number_of_employees": "40"})
    assert f["current_workstations"] == "40"
    assert f["workstation_utilization"] == "0"
    assert f["utilization"] == "0"
    assert f["annual_cost_per_workstation"] == "9000"
    assert f["work_model"] == "hybrid"
    assert f["organisation_name"] == ""


def test_normalized_renders_json_numbers_as_form_text():
    f = normalized({"number_of_employees": 1000.0, "current_workstations": 1000,
                    "workstation_utilization": 50.0, "annual_cost_per_workstation": 9500.5})
    assert f["number_of_employees"] == "1000"
    assert f["current_workstations"] == "1000"
    assert f["workstation_utilization"] == "50"
    assert f["annual_cost_per_workstation"] == "9500.5"
