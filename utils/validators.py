# utils/validators.py
"""
Field rules for the application form.

Each rule is a small predicate that looks at one raw value and returns a
``Reason`` when the value is unacceptable, or ``None`` when it passes.
``collect_errors`` runs every rule against a submitted mapping and never
stops at the first failure, so the applicant sees all problems at once.
"""
import re
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, NamedTuple, Optional


class Reason(str, Enum):
    MISSING = "missing"
    NOT_A_NUMBER = "not_a_number"
    BELOW_MINIMUM = "below_minimum"
    OUT_OF_RANGE = "out_of_range"
    BAD_FORMAT = "bad_format"


class FieldError(NamedTuple):
    field: str
    reason: Reason
    message: str


MIN_SALARY = 100000
MIN_EDUCATION_YEAR = 1985
MAX_EDUCATION_YEAR = 2100
# INTEGER column ceiling
MAX_SALARY = 2 ** 31 - 1
EXPERIENCE_STATUSES = ("fresher", "experienced")

NAME_RE = re.compile(r"^[A-Za-z]+(?: [A-Za-z]+)*$")
EMAIL_RE = re.compile(r"^[a-zA-Z0-9]{3,}@(gmail|outlook)\.(com|in|org|co)(\.[a-z]{2})?$")
MOBILE_RE = re.compile(r"^[6-9]\d{9}$")
PERCENTAGE_RE = re.compile(r"^\d{1,3}(\.\d{1,2})?$")
ALNUM_RE = re.compile(r"^[A-Za-z0-9]+$")
INTEGER_RE = re.compile(r"^-?\d+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _raw(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = _text(value)
    if not INTEGER_RE.match(text):
        return None
    return int(text)


# ---- Predicates ----
def required(value: Any) -> Optional[Reason]:
    return Reason.MISSING if not _text(value) else None


def integer_at_least(minimum: int, maximum: int) -> Callable[[Any], Optional[Reason]]:
    def check(value: Any) -> Optional[Reason]:
        if not _text(value):
            return Reason.MISSING
        number = _as_int(value)
        if number is None:
            return Reason.NOT_A_NUMBER
        if number < minimum:
            return Reason.BELOW_MINIMUM
        return Reason.OUT_OF_RANGE if number > maximum else None
    return check


def integer_between(low: int, high: int) -> Callable[[Any], Optional[Reason]]:
    def check(value: Any) -> Optional[Reason]:
        if not _text(value):
            return Reason.MISSING
        number = _as_int(value)
        if number is None:
            return Reason.NOT_A_NUMBER
        return Reason.OUT_OF_RANGE if not low <= number <= high else None
    return check


def min_length(length: int) -> Callable[[Any], Optional[Reason]]:
    def check(value: Any) -> Optional[Reason]:
        text = _text(value)
        if not text:
            return Reason.MISSING
        return Reason.BAD_FORMAT if len(text) < length else None
    return check


def matches(pattern: "re.Pattern[str]") -> Callable[[Any], Optional[Reason]]:
    def check(value: Any) -> Optional[Reason]:
        # Patterns are checked against the raw value; "John  Doe" must fail.
        text = _raw(value)
        if not text.strip():
            return Reason.MISSING
        return None if pattern.match(text) else Reason.BAD_FORMAT
    return check


def one_of(choices: Iterable[str]) -> Callable[[Any], Optional[Reason]]:
    allowed = tuple(choices)

    def check(value: Any) -> Optional[Reason]:
        text = _raw(value)
        if not text.strip():
            return Reason.MISSING
        return None if text in allowed else Reason.BAD_FORMAT
    return check


def iso_date(value: Any) -> Optional[Reason]:
    text = _raw(value)
    if not text.strip():
        return Reason.MISSING
    if not DATE_RE.match(text):
        return Reason.BAD_FORMAT
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return Reason.BAD_FORMAT
    return None


def percentage(value: Any) -> Optional[Reason]:
    text = _text(value)
    if not text:
        return Reason.MISSING
    if not PERCENTAGE_RE.match(text):
        return Reason.BAD_FORMAT
    return Reason.OUT_OF_RANGE if float(text) > 100 else None


person_name = matches(NAME_RE)
email_address = matches(EMAIL_RE)
mobile_number = matches(MOBILE_RE)
alphanumeric = matches(ALNUM_RE)


class Rule(NamedTuple):
    field: str
    check: Callable[[Any], Optional[Reason]]
    message: str
    missing_message: Optional[str] = None
    range_message: Optional[str] = None


BASE_RULES = (
    Rule("department", required, "Department is required"),
    Rule("job_role", required, "Job role is required"),
    Rule("branch_location", required, "Branch location is required"),
    Rule("expected_salary", integer_at_least(MIN_SALARY, MAX_SALARY),
         "Expected salary must be at least ₹1,00,000", range_message="Expected salary is too large"),
    Rule("employment_type", required, "Employment type is required"),
    Rule("interview_date", iso_date, "Invalid interview date", "Interview date is required"),
    Rule("joining_date", iso_date, "Invalid joining date", "Joining date is required"),
    Rule("full_name", person_name, "Invalid full name format", "Full name is required"),
    Rule("email", email_address, "Invalid email format", "Email is required"),
    Rule("dob", iso_date, "Invalid date of birth", "Date of birth is required"),
    Rule("mobile_number", mobile_number, "Invalid mobile number", "Mobile number is required"),
    Rule("father_name", person_name, "Invalid father name format", "Father name is required"),
    Rule("permanent_address", min_length(5),
         "Permanent address is required and must be at least 5 characters"),
    Rule("ssc_year", integer_at_least(MIN_EDUCATION_YEAR, MAX_EDUCATION_YEAR), "Invalid SSC year"),
    Rule("ssc_percentage", percentage, "Invalid SSC percentage"),
    Rule("intermediate_year", integer_at_least(MIN_EDUCATION_YEAR, MAX_EDUCATION_YEAR), "Invalid Intermediate year"),
    Rule("intermediate_percentage", percentage, "Invalid Intermediate percentage"),
    Rule("college_name", person_name, "Invalid college name"),
    Rule("register_number", alphanumeric, "Invalid registration number"),
    Rule("graduation_year", integer_at_least(MIN_EDUCATION_YEAR, MAX_EDUCATION_YEAR), "Invalid graduation year"),
    Rule("graduation_percentage", percentage, "Invalid graduation percentage"),
    Rule("experience_status", one_of(EXPERIENCE_STATUSES), "Invalid experience status",
         "Experience status is required"),
)

EXPERIENCED_RULES = (
    Rule("years_of_experience", integer_between(1, 40), "Years of experience must be between 1 and 40"),
    Rule("previous_company", person_name, "Invalid previous company name"),
    Rule("previous_job_role", required, "Previous job role is required"),
)


def is_experienced(fields: Mapping[str, Any]) -> bool:
    return _raw(fields.get("experience_status")) == "experienced"


def collect_errors(fields: Mapping[str, Any]) -> List[FieldError]:
    rules = BASE_RULES + (EXPERIENCED_RULES if is_experienced(fields) else ())
    errors = []
    for rule in rules:
        reason = rule.check(fields.get(rule.field))
        if reason is None:
            continue
        message = rule.message
        if reason is Reason.MISSING and rule.missing_message:
            message = rule.missing_message
        elif reason is Reason.OUT_OF_RANGE and rule.range_message:
            message = rule.range_message
        errors.append(FieldError(rule.field, reason, message))
    return errors


def validate_application(fields: Mapping[str, Any]) -> List[str]:
    """Return the human-readable problems with a submission; empty means valid."""
    return [error.message for error in collect_errors(fields)]
