# controllers/application_controller.py
import logging
from datetime import date
from typing import Optional, Dict, Any, Mapping

from pydantic import BaseModel, EmailStr, Field, ValidationError, model_validator

from db.repository import ApplicationRepository
from utils.errors import Conflict, InvalidArgument, ValidationFailed
from utils.file_store import FileStore
from utils.validators import validate_application

logger = logging.getLogger(__name__)

# upload field -> column holding its stored name
REQUIRED_DOCUMENTS = {
    "ssc_doc": "ssc_doc_path",
    "intermediate_doc": "intermediate_doc_path",
    "graduation_doc": "graduation_doc_path",
}
OPTIONAL_DOCUMENTS = {
    "additional_files": "additional_files_path",
}
OFFER_LETTER_FIELD = "offerLetter"


# ---- Pydantic models ----
class ApplicationForm(BaseModel):
    """Typed view of an already-validated submission."""

    department: str
    job_role: str
    branch_location: str
    expected_salary: int
    employment_type: str
    interview_date: date
    joining_date: date

    full_name: str
    email: EmailStr
    dob: date
    mobile_number: str = Field(..., min_length=10, max_length=10)
    father_name: str
    permanent_address: str

    ssc_year: int
    ssc_percentage: float
    intermediate_year: int
    intermediate_percentage: float
    college_name: str
    register_number: str
    graduation_year: int
    graduation_percentage: float
    additional_certifications: Optional[str] = None

    experience_status: str
    years_of_experience: Optional[int] = None
    previous_company: Optional[str] = None
    previous_job_role: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def normalize_optional(cls, values):
        values = dict(values)
        # Freshers never carry experience details, whatever the form sent
        if values.get("experience_status") != "experienced":
            for k in ("years_of_experience", "previous_company", "previous_job_role"):
                values[k] = None
        if not (values.get("additional_certifications") or "").strip():
            values["additional_certifications"] = None
        return values


# ---- Helpers ----
def _clean(form: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v.strip() if isinstance(v, str) else v for k, v in form.items()}


def _present(upload) -> bool:
    return upload is not None and bool(upload.filename)


def _read_upload(upload, file_store: FileStore) -> bytes:
    # One byte past the limit is enough to know it is too big
    data = upload.read(file_store.max_bytes + 1)
    file_store.check(upload.filename, len(data), upload.mimetype)
    return data


# ---- Main controller ----
def submit_application(form: Mapping[str, Any], files: Mapping[str, Any],
                       repository: ApplicationRepository, file_store: FileStore) -> Dict[str, Any]:
    """
    Validates the form and documents, stores the documents, inserts the row.
    Returns {"id", "reference_id"}. Raises ApplicationError subclasses.
    Nothing is written to disk or database until every check has passed.
    """
    # Validator and coercion must see the same values
    form = _clean(form)
    errors = validate_application(form)
    if errors:
        raise ValidationFailed(errors)

    if not all(_present(files.get(name)) for name in REQUIRED_DOCUMENTS):
        raise InvalidArgument("Required documents missing")

    try:
        fields = ApplicationForm(**form).model_dump()
    except ValidationError as ve:
        raise ValidationFailed([f"Invalid {err['loc'][0] if err['loc'] else 'input'}" for err in ve.errors()])

    pending = {}
    for name in list(REQUIRED_DOCUMENTS) + list(OPTIONAL_DOCUMENTS):
        upload = files.get(name)
        if _present(upload):
            pending[name] = (upload.filename, upload.mimetype, _read_upload(upload, file_store))

    duplicate = repository.find_duplicate(fields["email"], fields["mobile_number"])
    if duplicate:
        raise Conflict(duplicate)

    columns = dict(REQUIRED_DOCUMENTS, **OPTIONAL_DOCUMENTS)
    documents = {}
    try:
        for name, (filename, mimetype, data) in pending.items():
            documents[columns[name]] = file_store.store(name, filename, data, mimetype)
        application_id, reference_id = repository.create(fields, documents)
    except Exception:
        for stored_name in documents.values():
            file_store.remove(stored_name)
        raise

    logger.info("Application %s submitted with %d documents", reference_id, len(documents))
    return {"id": application_id, "reference_id": reference_id}


def upload_offer_letter(application_id: int, upload, repository: ApplicationRepository,
                        file_store: FileStore):
    """Store the offer letter and point the application at it.

    A letter it replaces is deleted once the new one is attached.
    """
    if not _present(upload):
        raise InvalidArgument("No file uploaded")

    data = _read_upload(upload, file_store)
    previous = repository.get_by_id(application_id).offer_letter_path
    stored_name = file_store.store(OFFER_LETTER_FIELD, upload.filename, data, upload.mimetype)
    try:
        application = repository.attach_offer_letter(application_id, stored_name)
    except Exception:
        # NotFound included: the letter has nowhere to belong
        file_store.remove(stored_name)
        raise

    if previous and previous != stored_name:
        file_store.remove(previous)
        logger.info("Replaced offer letter %s with %s", previous, stored_name)
    return application
