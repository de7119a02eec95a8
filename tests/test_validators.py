# tests/test_validators.py
import pytest

from utils.validators import Reason, collect_errors, percentage, person_name, validate_application
from conftest import valid_form


def test_valid_form_has_no_errors():
    assert validate_application(valid_form()) == []


def test_low_salary_is_reported():
    errors = validate_application(valid_form(expected_salary="50000"))
    assert errors == ["Expected salary must be at least ₹1,00,000"]


def test_non_numeric_salary_is_reported():
    errors = collect_errors(valid_form(expected_salary="lots"))
    assert [(e.field, e.reason) for e in errors] == [("expected_salary", Reason.NOT_A_NUMBER)]


def test_all_rules_are_checked_in_form_order():
    errors = validate_application(valid_form(
        department="",
        full_name="John  Doe",
        email="jd@yahoo.com",
        mobile_number="5876543210",
        ssc_year="1980",
    ))
    assert errors == [
        "Department is required",
        "Invalid full name format",
        "Invalid email format",
        "Invalid mobile number",
        "Invalid SSC year",
    ]


def test_empty_submission_reports_every_required_field():
    errors = collect_errors({})
    fields = [e.field for e in errors]
    assert "department" in fields
    assert "graduation_percentage" in fields
    assert "experience_status" in fields
    assert all(e.reason is Reason.MISSING for e in errors)
    # experience details only matter for experienced applicants
    assert "previous_company" not in fields


def test_missing_dates_use_required_message():
    errors = validate_application(valid_form(interview_date="", dob="01/01/1995"))
    assert errors == ["Interview date is required", "Invalid date of birth"]


@pytest.mark.parametrize("email", [
    "johndoe@gmail.com",
    "abc123@outlook.in",
    "someone@gmail.co.uk",
])
def test_allowed_emails(email):
    assert validate_application(valid_form(email=email)) == []


@pytest.mark.parametrize("email", [
    "jd@gmail.com",
    "john.doe@gmail.com",
    "johndoe@yahoo.com",
    "johndoe@gmail.net",
])
def test_rejected_emails(email):
    assert validate_application(valid_form(email=email)) == ["Invalid email format"]


@pytest.mark.parametrize("value,expected", [
    ("0", None),
    ("100", None),
    ("85.55", None),
    ("85.555", Reason.BAD_FORMAT),
    ("100.5", Reason.OUT_OF_RANGE),
    ("-1", Reason.BAD_FORMAT),
    ("", Reason.MISSING),
])
def test_percentage(value, expected):
    assert percentage(value) is expected


def test_person_name_rejects_digits_and_edge_spaces():
    assert person_name("Jane Roe") is None
    assert person_name("Jane2") is Reason.BAD_FORMAT
    assert person_name(" Jane") is Reason.BAD_FORMAT


def test_register_number_must_be_alphanumeric():
    assert validate_application(valid_form(register_number="REG-1")) == ["Invalid registration number"]


def test_short_address():
    assert validate_application(valid_form(permanent_address="abc")) == [
        "Permanent address is required and must be at least 5 characters"
    ]


def test_experienced_requires_experience_details():
    errors = validate_application(valid_form(experience_status="experienced"))
    assert errors == [
        "Years of experience must be between 1 and 40",
        "Invalid previous company name",
        "Previous job role is required",
    ]


def test_experienced_years_out_of_range():
    form = valid_form(
        experience_status="experienced",
        years_of_experience="41",
        previous_company="ABC Corp",
        previous_job_role="Junior Developer",
    )
    errors = collect_errors(form)
    assert [(e.field, e.reason) for e in errors] == [("years_of_experience", Reason.OUT_OF_RANGE)]


def test_fresher_ignores_experience_fields():
    form = valid_form(years_of_experience="99", previous_company="123")
    assert validate_application(form) == []


def test_unknown_experience_status():
    assert validate_application(valid_form(experience_status="retired")) == ["Invalid experience status"]


def test_validation_is_deterministic():
    form = valid_form(expected_salary="1", email="bad")
    assert validate_application(form) == validate_application(form)


def test_salary_has_an_upper_bound():
    assert validate_application(valid_form(expected_salary=str(2 ** 31 - 1))) == []
    errors = collect_errors(valid_form(expected_salary="100000000000000000000"))
    assert [(e.field, e.reason, e.message) for e in errors] == [
        ("expected_salary", Reason.OUT_OF_RANGE, "Expected salary is too large")
    ]


def test_education_year_has_an_upper_bound():
    errors = collect_errors(valid_form(graduation_year="30000"))
    assert [(e.field, e.reason) for e in errors] == [("graduation_year", Reason.OUT_OF_RANGE)]


@pytest.mark.parametrize("status", ["experienced ", " fresher"])
def test_experience_status_is_checked_unpadded(status):
    assert validate_application(valid_form(experience_status=status)) == ["Invalid experience status"]


def test_padded_date_is_rejected():
    assert validate_application(valid_form(joining_date=" 2025-06-15")) == ["Invalid joining date"]
