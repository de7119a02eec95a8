# db/repository.py
import logging
import uuid
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from models.application import Application, STATUSES, STATUS_APPROVED, STATUS_PENDING
from utils.errors import Conflict, InvalidArgument, NotFound

logger = logging.getLogger(__name__)

REFERENCE_ATTEMPTS = 3


def generate_reference_id() -> str:
    return f"REF-{uuid.uuid4().hex[:8].upper()}"


class ApplicationRepository:
    """All reads and writes of the employee_details table go through here."""

    def __init__(self, session_factory):
        self._sessions = session_factory

    # ---- create ----
    def find_duplicate(self, email: str, mobile_number: str, session=None) -> Optional[str]:
        """Return "email" or "mobile" if either is already taken, else None."""
        own_session = session is None
        session = session or self._sessions()
        try:
            existing = (
                session.query(Application.email, Application.mobile_number)
                .filter(or_(Application.email == email, Application.mobile_number == mobile_number))
                .all()
            )
        finally:
            if own_session:
                self._sessions.remove()
        if any(row.email == email for row in existing):
            return "email"
        if any(row.mobile_number == mobile_number for row in existing):
            return "mobile"
        return None

    def create(self, fields: dict, documents: dict) -> Tuple[int, str]:
        """
        Insert a new Pending application.

        The pre-check gives a clean Conflict in the common case; the unique
        constraints catch a concurrent submission that slips in between.
        """
        session = self._sessions()
        try:
            duplicate = self.find_duplicate(fields["email"], fields["mobile_number"], session=session)
            if duplicate:
                raise Conflict(duplicate)

            for _ in range(REFERENCE_ATTEMPTS):
                application = Application(
                    reference_id=generate_reference_id(),
                    status=STATUS_PENDING,
                    **fields,
                    **documents,
                )
                session.add(application)
                try:
                    session.commit()
                except IntegrityError:
                    session.rollback()
                    duplicate = self.find_duplicate(fields["email"], fields["mobile_number"], session=session)
                    if duplicate:
                        raise Conflict(duplicate)
                    if self._reference_taken(session, application.reference_id):
                        logger.warning("Reference id collision on %s, regenerating", application.reference_id)
                        continue
                    raise
                logger.info("Created application %s (%s)", application.id, application.reference_id)
                return application.id, application.reference_id

            raise RuntimeError("Could not allocate a unique reference id")
        except Exception:
            session.rollback()
            raise
        finally:
            self._sessions.remove()

    def _reference_taken(self, session, reference_id: str) -> bool:
        return session.query(Application.id).filter(Application.reference_id == reference_id).first() is not None

    # ---- reads ----
    def list(self, status: Optional[str] = None) -> List[Application]:
        if status is not None and status not in STATUSES:
            raise InvalidArgument("Invalid status")
        session = self._sessions()
        try:
            query = session.query(Application)
            if status is not None:
                query = query.filter(Application.status == status)
            return query.order_by(Application.created_at.desc(), Application.id.desc()).all()
        finally:
            self._sessions.remove()

    def get_by_id(self, application_id: int) -> Application:
        session = self._sessions()
        try:
            application = session.get(Application, application_id)
            if application is None:
                raise NotFound("Application not found")
            return application
        finally:
            self._sessions.remove()

    def get_offer_letter(self, reference_id: str, email: str) -> str:
        """
        Stored name of the offer letter for an approved application.

        Unknown, unapproved and letter-less applications all raise the same
        NotFound so that callers learn nothing about the status.
        """
        session = self._sessions()
        try:
            path = (
                session.query(Application.offer_letter_path)
                .filter(
                    Application.reference_id == reference_id,
                    Application.email == email,
                    Application.status == STATUS_APPROVED,
                )
                .scalar()
            )
        finally:
            self._sessions.remove()
        if not path:
            raise NotFound("Offer letter not found or application not approved")
        return path

    # ---- updates ----
    def update_status(self, application_id: int, status: str) -> Application:
        if status not in STATUSES:
            raise InvalidArgument("Invalid status")
        return self._update(application_id, status=status)

    def attach_offer_letter(self, application_id: int, stored_name: str) -> Application:
        return self._update(application_id, offer_letter_path=stored_name)

    def _update(self, application_id: int, **values) -> Application:
        session = self._sessions()
        try:
            application = session.get(Application, application_id)
            if application is None:
                raise NotFound("Application not found")
            for key, value in values.items():
                setattr(application, key, value)
            application.updated_at = datetime.utcnow()
            session.commit()
            session.refresh(application)
            return application
        except Exception:
            session.rollback()
            raise
        finally:
            self._sessions.remove()
