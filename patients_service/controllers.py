"""HTTP handlers for the patient API."""

from __future__ import annotations

import functools
import json
import re
import uuid
from http import HTTPStatus
from typing import Any, Callable, Optional, Tuple

from flask import Response, jsonify, request

from .model import NIL_UUID, Contact, Document, Inn, Insurance, Patient, Snils, ValidationError

HandlerResult = Tuple[Response, int]

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _BindError(ValueError):
    """Raised when the request body is not a JSON document."""


def _reply(payload: Any, status: int = HTTPStatus.OK) -> HandlerResult:
    return jsonify(payload), int(status)


def _invalid_input(exc: Exception) -> HandlerResult:
    return _reply({"error": "Invalid input", "details": str(exc)}, HTTPStatus.BAD_REQUEST)


def _failure(exc: Exception) -> HandlerResult:
    return _reply({"error": str(exc)}, HTTPStatus.INTERNAL_SERVER_ERROR)


def _missing_id() -> HandlerResult:
    return _reply({"error": "ID not found in context"}, HTTPStatus.BAD_REQUEST)


def _bind_json(kind: Any) -> Any:
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        data = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as exc:
        raise _BindError(str(exc)) from exc
    return kind.from_dict({} if data is None else data)


def _apply(kind: Any, action: Callable[[Any], Any], message: str) -> HandlerResult:
    """Bind the body to a record, hand it to action and report the outcome."""
    try:
        record = _bind_json(kind)
    except (_BindError, ValidationError) as exc:
        return _invalid_input(exc)
    try:
        action(record)
    except Exception as exc:
        return _failure(exc)
    return _reply({"message": message})


def _param_id(value: Any) -> uuid.UUID:
    """Parse a path id, falling back to the nil UUID when it does not parse."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return NIL_UUID


def _context_id(value: Any) -> Optional[uuid.UUID]:
    """Return the id placed by the UUID check, or None when there is none."""
    if isinstance(value, uuid.UUID):
        return value
    if value is None:
        return None
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


def _parse_int(value: Any) -> Optional[int]:
    text = str(value)
    if not _INT_PATTERN.fullmatch(text):
        return None
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        return None
    return number


def validate_uuid_param(param_name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Reject requests whose path parameter is not a UUID; pass it on parsed."""

    def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                parsed = uuid.UUID(str(kwargs.get(param_name, "")))
            except ValueError:
                return _reply({"error": "invalid UUID format"}, HTTPStatus.BAD_REQUEST)
            kwargs[param_name] = parsed
            return view(*args, **kwargs)

        return wrapper

    return decorator


class PatientController:
    """Handlers for patient resources."""

    def __init__(self, patient_service: Any, transaction: Any) -> None:
        self.patient_service = patient_service
        self.transaction = transaction

    def create_patient(self) -> HandlerResult:
        return _apply(
            Patient,
            self.transaction.create_patient,
            "Patient created successfully with transaction",
        )

    def update_patient(self, id: Any) -> HandlerResult:
        patient_id = _param_id(id)
        return _apply(
            Patient,
            lambda patient: self.transaction.update_patient(patient_id, patient),
            "Patient updated successfully",
        )

    def get_patient(self, id: Any) -> HandlerResult:
        patient_id = _context_id(id)
        if patient_id is None:
            return _missing_id()
        try:
            patient = self.patient_service.get_patient(patient_id)
        except Exception as exc:
            return _failure(exc)
        return _reply(patient.to_dict())

    def get_patients(self, limit: Any, offset: Any) -> HandlerResult:
        limit_value = _parse_int(limit)
        if limit_value is None:
            return _reply({"error": "Invalid limit"}, HTTPStatus.BAD_REQUEST)
        offset_value = _parse_int(offset)
        if offset_value is None:
            return _reply({"error": "Invalid offset"}, HTTPStatus.BAD_REQUEST)
        try:
            patients = self.patient_service.get_patients(limit_value, offset_value)
        except Exception as exc:
            return _failure(exc)
        # An empty page is reported as null, not as an empty list.
        return _reply([patient.to_dict() for patient in patients] or None)

    def mark_patient_as_deleted(self, id: Any) -> HandlerResult:
        patient_id = _context_id(id)
        if patient_id is None:
            return _missing_id()
        try:
            self.patient_service.mark_patient_as_deleted(patient_id)
        except Exception as exc:
            return _failure(exc)
        return _reply(None)

    def unmark_patient_as_deleted(self, id: Any) -> HandlerResult:
        patient_id = _context_id(id)
        if patient_id is None:
            return _missing_id()
        try:
            self.patient_service.unmark_patient_as_deleted(patient_id)
        except Exception as exc:
            return _failure(exc)
        return _reply(None)


class ContactController:
    """Handlers for patient contacts."""

    def __init__(self, contact_service: Any) -> None:
        self.contact_service = contact_service

    def update_contact(self, id: Any) -> HandlerResult:
        patient_id = _param_id(id)
        return _apply(
            Contact,
            lambda contact: self.contact_service.update_contact(None, patient_id, contact),
            "Contact updated successfully",
        )


class SnilsController:
    """Handlers for SNILS numbers."""

    def __init__(self, snils_service: Any) -> None:
        self.snils_service = snils_service

    def update_snils(self, id: Any) -> HandlerResult:
        patient_id = _param_id(id)
        return _apply(
            Snils,
            lambda snils: self.snils_service.update_snils(None, patient_id, snils),
            "Snils updated successfully",
        )


class InnController:
    """Handlers for INN numbers."""

    def __init__(self, inn_service: Any) -> None:
        self.inn_service = inn_service

    def update_inn(self, id: Any) -> HandlerResult:
        patient_id = _param_id(id)
        return _apply(
            Inn,
            lambda inn: self.inn_service.update_inn(None, patient_id, inn),
            "Inn updated successfully",
        )


class InsuranceController:
    """Handlers for insurance policies."""

    def __init__(self, insurance_service: Any) -> None:
        self.insurance_service = insurance_service

    def create_insurance(self) -> HandlerResult:
        return _apply(
            Insurance,
            lambda insurance: self.insurance_service.create_insurance(None, insurance),
            "Insurance created successfully",
        )

    def update_insurance(self, id: Any) -> HandlerResult:
        insurance_id = _param_id(id)
        return _apply(
            Insurance,
            lambda insurance: self.insurance_service.update_insurance(None, insurance_id, insurance),
            "Insurance updated successfully",
        )

    def delete_insurance(self, id: Any) -> HandlerResult:
        insurance_id = _context_id(id)
        if insurance_id is None:
            return _missing_id()
        try:
            self.insurance_service.delete_insurance(insurance_id)
        except Exception as exc:
            return _failure(exc)
        return _reply({"message": "Insurance deleted successfully"})


class DocumentController:
    """Handlers for identity documents."""

    def __init__(self, document_service: Any) -> None:
        self.document_service = document_service

    def create_document(self) -> HandlerResult:
        return _apply(
            Document,
            lambda document: self.document_service.create_document(None, document),
            "Document created successfully",
        )

    def update_document(self, id: Any) -> HandlerResult:
        document_id = _param_id(id)
        return _apply(
            Document,
            lambda document: self.document_service.update_document(None, document_id, document),
            "Document updated successfully",
        )

    def delete_document(self, id: Any) -> HandlerResult:
        document_id = _context_id(id)
        if document_id is None:
            return _missing_id()
        try:
            self.document_service.delete_document(document_id)
        except Exception as exc:
            return _failure(exc)
        return _reply({"message": "Document deleted successfully"})