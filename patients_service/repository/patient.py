"""Storage of patients and the patient listing."""

from __future__ import annotations

import datetime
import uuid
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ..database import DatabaseError, PgContext
from ..model import Contact, Document, Inn, Insurance, Patient, Snils
from ..sqlstore import QueryNotFoundError, SqlStore

AUDIT_USER = "admin"

_DB_ERRORS = (DatabaseError, SQLAlchemyError)

_PATIENT_COLUMNS = 35
_LIST_COLUMNS = 21


class RepositoryError(Exception):
    """Raised when a stored record cannot be read or written."""


class PatientNotFoundError(RepositoryError):
    """Raised when no patient has the requested id."""


class VersionConflictError(RepositoryError):
    """Raised when an update is based on an outdated version."""


class _Repository:
    """Shared plumbing: named queries and a database context."""

    def __init__(self, pg_context: PgContext, sql_store: SqlStore) -> None:
        self.pg_context = pg_context
        self.sql_store = sql_store

    def _query(self, name: str) -> str:
        try:
            return self.sql_store.get_query(name)
        except QueryNotFoundError:
            raise RepositoryError(f"SQL query {name} not found") from None

    def _execute(self, tx: Any, name: str, failure: str, *args: Any) -> int:
        query = self._query(name)
        try:
            return self.pg_context.execute(tx, query, *args)
        except _DB_ERRORS as exc:
            raise RepositoryError(f"{failure}: {exc}") from exc

    def _execute_plain(self, name: str, failure: str, *args: Any) -> int:
        """Run on the pool, reporting failure without the cause in the message."""
        query = self._query(name)
        try:
            return self.pg_context.execute(None, query, *args)
        except _DB_ERRORS as exc:
            raise RepositoryError(failure) from exc


def _to_uuid(value: Any) -> uuid.UUID | None:
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


def _to_date(value: Any) -> datetime.date | None:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    return datetime.date.fromisoformat(str(value))


def _to_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _to_bool(value: Any) -> bool | None:
    return None if value is None else bool(value)


def _person(cols: Sequence[Any]) -> dict[str, Any]:
    ident, first_name, last_name, middle_name, birth_date, gender = cols
    return {
        "id": _to_uuid(ident),
        "first_name": first_name,
        "last_name": last_name,
        "middle_name": middle_name,
        "birth_date": _to_date(birth_date),
        "gender": _to_bool(gender),
    }


def _contact(cols: Sequence[Any]) -> Contact:
    phone, work_phone, email = cols
    return Contact(work_phone_number=work_phone, phone_number=phone, email=email)


def _full_insurance(cols: Sequence[Any]) -> Insurance:
    ident, number, issue, expiry, kind, main, company = cols
    return Insurance(
        id=_to_uuid(ident),
        number=number,
        issue_date=_to_date(issue),
        expiry_date=_to_date(expiry),
        type=_to_int(kind),
        main=_to_bool(main),
        insurance_company_id=_to_int(company),
    )


def _short_insurance(cols: Sequence[Any]) -> Insurance:
    ident, number, company = cols
    return Insurance(id=_to_uuid(ident), number=number, insurance_company_id=_to_int(company))


def _full_document(cols: Sequence[Any]) -> Document:
    ident, series, number, department, issue, expiry, main, type_id, company = cols
    return Document(
        id=_to_uuid(ident),
        series=series,
        number=number,
        department_code=department,
        issue_date=_to_date(issue),
        expiry_date=_to_date(expiry),
        main=_to_bool(main),
        document_type_id=_to_int(type_id),
        document_company_id=_to_int(company),
    )


def _short_document(cols: Sequence[Any]) -> Document:
    ident, series, number, type_id = cols
    return Document(id=_to_uuid(ident), series=series, number=number, document_type_id=_to_int(type_id))


def _patient_from_row(row: Sequence[Any]) -> Patient:
    if len(row) != _PATIENT_COLUMNS:
        raise ValueError(f"expected {_PATIENT_COLUMNS} columns, got {len(row)}")
    patient = Patient(
        **_person(row[0:6]),
        version=int(row[6]),
        contact=_contact(row[7:10]),
        snils=Snils(number=row[10]),
        inn=Inn(number=row[11]),
        insurance_oms=_full_insurance(row[12:19]),
        insurance_dms=_full_insurance(row[19:26]),
        document=_full_document(row[26:35]),
    )
    patient.sanitize()
    return patient


def _listed_patient_from_row(row: Sequence[Any]) -> Patient:
    if len(row) != _LIST_COLUMNS:
        raise ValueError(f"expected {_LIST_COLUMNS} columns, got {len(row)}")
    patient = Patient(
        **_person(row[0:6]),
        contact=_contact(row[6:9]),
        snils=Snils(number=row[9]),
        inn=Inn(number=row[10]),
        insurance_oms=_short_insurance(row[11:14]),
        insurance_dms=_short_insurance(row[14:17]),
        document=_short_document(row[17:21]),
    )
    patient.sanitize()
    return patient


class PatientRepository(_Repository):
    """Reads and writes patient rows."""

    def create_patient(self, tx: Any, patient: Patient) -> uuid.UUID:
        """Insert a patient and return the id the database assigned."""
        query = self._query("insert_patient.sql")
        try:
            row = self.pg_context.query_row(
                tx,
                query,
                patient.first_name,
                patient.last_name,
                patient.middle_name,
                patient.birth_date,
                patient.gender,
                AUDIT_USER,
            )
        except _DB_ERRORS as exc:
            raise RepositoryError(f"error creating patient: {exc}") from exc
        if row is None:
            raise RepositoryError("error creating patient: no rows in result set")
        try:
            patient_id = _to_uuid(row[0])
        except (IndexError, ValueError) as exc:
            raise RepositoryError(f"error creating patient: {exc}") from exc
        if patient_id is None:
            raise RepositoryError("error creating patient: no id returned")
        return patient_id

    def get_patient(self, id: uuid.UUID) -> Patient:
        """Return the patient with the given id."""
        query = self._query("get_patient_by_id.sql")
        try:
            row = self.pg_context.query_row(None, query, id)
        except _DB_ERRORS as exc:
            raise RepositoryError(f"error retrieving patient: {exc}") from exc
        if row is None:
            raise PatientNotFoundError(f"patient with id {id} not found")
        try:
            return _patient_from_row(row)
        except (TypeError, ValueError) as exc:
            raise RepositoryError(f"error retrieving patient: {exc}") from exc

    def get_patients(self, limit: int, offset: int) -> list[Patient]:
        """Return a page of patients."""
        query = self._query("get_patients.sql")
        try:
            rows = self.pg_context.query(query, limit, offset)
        except _DB_ERRORS as exc:
            raise RepositoryError(f"failed to execute query: {exc}") from exc
        try:
            return [_listed_patient_from_row(row) for row in rows]
        except (TypeError, ValueError) as exc:
            raise RepositoryError(f"failed to scan row: {exc}") from exc

    def update_patient(self, tx: Any, id: uuid.UUID, patient: Patient) -> None:
        """Update a patient, failing when the stored version is newer."""
        affected = self._execute(
            tx,
            "update_patient.sql",
            "error update patient",
            id,
            patient.first_name,
            patient.last_name,
            patient.middle_name,
            patient.birth_date,
            patient.gender,
            AUDIT_USER,
            patient.version,
        )
        if affected == 0:
            raise VersionConflictError("error update patient. Version in DB is higher")

    def mark_patient_as_deleted(self, id: uuid.UUID) -> None:
        self._execute(None, "mark_deleted_patient.sql", "error mark deleted patient", id, AUDIT_USER)

    def unmark_patient_as_deleted(self, id: uuid.UUID) -> None:
        self._execute(None, "unmark_deleted_patient.sql", "error unmark deleted patient", id, AUDIT_USER)