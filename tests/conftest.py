# tests/conftest.py
import io

import pytest

from app import create_app

ALLOWED_ORIGIN = "http://localhost:7771"
PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"


def make_app(tmp_path, **overrides):
    config = {
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "UPLOAD_DIR": str(tmp_path / "uploads"),
        "ALLOWED_ORIGINS": [ALLOWED_ORIGIN],
        "RATELIMIT_ENABLED": False,
        "TESTING": True,
    }
    config.update(overrides)
    return create_app(config)


@pytest.fixture
def app(tmp_path):
    return make_app(tmp_path)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def repository(app):
    return app.extensions["repository"]


@pytest.fixture
def file_store(app):
    return app.extensions["file_store"]


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


def valid_form(**changes):
    form = {
        "department": "Engineering",
        "job_role": "Software Engineer",
        "branch_location": "Bangalore",
        "expected_salary": "500000",
        "employment_type": "Full-time",
        "interview_date": "2025-06-01",
        "joining_date": "2025-06-15",
        "full_name": "John Doe",
        "email": "johndoe@gmail.com",
        "dob": "1995-01-01",
        "mobile_number": "9876543210",
        "father_name": "James Doe",
        "permanent_address": "123 Main St, Bangalore",
        "ssc_year": "2010",
        "ssc_percentage": "85.5",
        "intermediate_year": "2012",
        "intermediate_percentage": "88",
        "college_name": "XYZ University",
        "register_number": "REG12345",
        "graduation_year": "2016",
        "graduation_percentage": "90.25",
        "additional_certifications": "AWS Certified Developer",
        "experience_status": "fresher",
    }
    form.update(changes)
    return form


def pdf_upload(name="doc.pdf", data=PDF_BYTES, content_type="application/pdf"):
    return (io.BytesIO(data), name, content_type)


def documents(**changes):
    docs = {
        "ssc_doc": pdf_upload("ssc.pdf"),
        "intermediate_doc": pdf_upload("inter.pdf"),
        "graduation_doc": pdf_upload("grad.pdf"),
    }
    docs.update(changes)
    return {k: v for k, v in docs.items() if v is not None}


def submit(client, form=None, docs=None, **kwargs):
    data = dict(form if form is not None else valid_form())
    data.update(docs if docs is not None else documents())
    return client.post("/api/applications", data=data, content_type="multipart/form-data", **kwargs)
