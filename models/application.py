# models/application.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Text, CheckConstraint, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()

STATUS_PENDING = "Pending"
STATUS_APPROVED = "Approved"
STATUS_REJECTED = "Rejected"
STATUSES = (STATUS_PENDING, STATUS_APPROVED, STATUS_REJECTED)


class Application(Base):
    __tablename__ = "employee_details"

    id = Column(Integer, primary_key=True)
    reference_id = Column(String(255), unique=True, nullable=False)

    # position
    department = Column(String(255), nullable=False)
    job_role = Column(String(255), nullable=False)
    branch_location = Column(String(255), nullable=False)
    expected_salary = Column(Integer, nullable=False)
    employment_type = Column(String(255), nullable=False)
    interview_date = Column(Date, nullable=False)
    joining_date = Column(Date, nullable=False)

    # applicant
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    dob = Column(Date, nullable=False)
    mobile_number = Column(String(10), unique=True, nullable=False)
    father_name = Column(String(255), nullable=False)
    permanent_address = Column(Text, nullable=False)

    # education
    ssc_year = Column(Integer, nullable=False)
    ssc_percentage = Column(Float, nullable=False)
    ssc_doc_path = Column(String(255), nullable=False)
    intermediate_year = Column(Integer, nullable=False)
    intermediate_percentage = Column(Float, nullable=False)
    intermediate_doc_path = Column(String(255), nullable=False)
    college_name = Column(String(255), nullable=False)
    register_number = Column(String(255), nullable=False)
    graduation_year = Column(Integer, nullable=False)
    graduation_percentage = Column(Float, nullable=False)
    graduation_doc_path = Column(String(255), nullable=False)
    additional_certifications = Column(String(255), nullable=True)
    additional_files_path = Column(String(255), nullable=True)

    # experience
    experience_status = Column(String(255), nullable=False)
    years_of_experience = Column(Integer, nullable=True)
    previous_company = Column(String(255), nullable=True)
    previous_job_role = Column(String(255), nullable=True)

    # workflow
    status = Column(String(50), nullable=False, default=STATUS_PENDING)
    offer_letter_path = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    __table_args__ = (
        CheckConstraint("expected_salary >= 100000", name="ck_expected_salary"),
        CheckConstraint("ssc_year >= 1985", name="ck_ssc_year"),
        CheckConstraint("intermediate_year >= 1985", name="ck_intermediate_year"),
        CheckConstraint("graduation_year >= 1985", name="ck_graduation_year"),
        CheckConstraint("ssc_percentage >= 0 AND ssc_percentage <= 100", name="ck_ssc_percentage"),
        CheckConstraint("intermediate_percentage >= 0 AND intermediate_percentage <= 100",
                        name="ck_intermediate_percentage"),
        CheckConstraint("graduation_percentage >= 0 AND graduation_percentage <= 100",
                        name="ck_graduation_percentage"),
        CheckConstraint("experience_status IN ('fresher', 'experienced')", name="ck_experience_status"),
        CheckConstraint("years_of_experience IS NULL OR (years_of_experience >= 1 AND years_of_experience <= 40)",
                        name="ck_years_of_experience"),
        CheckConstraint("status IN ('Pending', 'Approved', 'Rejected')", name="ck_status"),
        Index("idx_employee_details_reference_id", "reference_id"),
        Index("idx_employee_details_email", "email"),
        Index("idx_employee_details_status", "status"),
    )

    def to_dict(self):
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if hasattr(value, "isoformat"):
                value = value.isoformat()
            data[column.name] = value
        return data

    def __repr__(self):
        return f"<Application {self.id} {self.reference_id} {self.status}>"
