"""Patient records and their JSON form."""

from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping

NIL_UUID = uuid.UUID(int=0)


class ValidationError(ValueError):
    """Raised when input data does not fit a record."""


def _mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name}: expected an object")
    return data


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key}: expected a string")
    return value


def _req_str(data: Mapping[str, Any], key: str) -> str:
    value = _opt_str(data, key)
    return "" if value is None else value


def _opt_int(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key}: expected an integer")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{key}: expected an integer")
    return value


def _opt_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise ValidationError(f"{key}: expected a boolean")
    return value


def _opt_uuid(data: Mapping[str, Any], key: str) -> uuid.UUID | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{key}: expected a UUID string")
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ValidationError(f"{key}: invalid UUID") from exc


def _opt_date(data: Mapping[str, Any], key: str) -> datetime.date | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"{key}: expected a date string")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"{key}: invalid date") from exc


def _uuid_out(value: uuid.UUID | None) -> str | None:
    return None if value is None else str(value)


def _date_out(value: datetime.date | None) -> str | None:
    return None if value is None else value.isoformat()


@dataclass
class Contact:
    work_phone_number: str | None = None
    phone_number: str | None = None
    email: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Contact":
        data = _mapping(data, "contact")
        return cls(
            work_phone_number=_opt_str(data, "work_phone_number"),
            phone_number=_opt_str(data, "phone_number"),
            email=_opt_str(data, "email"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "work_phone_number": self.work_phone_number,
            "phone_number": self.phone_number,
            "email": self.email,
        }


@dataclass
class Snils:
    number: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Snils":
        return cls(number=_opt_str(_mapping(data, "snils"), "number"))

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number}


@dataclass
class Inn:
    number: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Inn":
        return cls(number=_opt_str(_mapping(data, "inn"), "number"))

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number}


@dataclass
class Insurance:
    id: uuid.UUID | None = None
    patient_id: uuid.UUID | None = None
    number: str | None = None
    issue_date: datetime.date | None = None
    expiry_date: datetime.date | None = None
    type: int | None = None
    main: bool | None = None
    insurance_company_id: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Insurance":
        data = _mapping(data, "insurance")
        return cls(
            id=_opt_uuid(data, "id"),
            patient_id=_opt_uuid(data, "patient_id"),
            number=_opt_str(data, "number"),
            issue_date=_opt_date(data, "issue_date"),
            expiry_date=_opt_date(data, "expiry_date"),
            type=_opt_int(data, "type"),
            main=_opt_bool(data, "main"),
            insurance_company_id=_opt_int(data, "insurance_company_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.id is not None:
            out["id"] = str(self.id)
        if self.patient_id is not None:
            out["patient_id"] = str(self.patient_id)
        out["number"] = self.number
        if self.issue_date is not None:
            out["issue_date"] = self.issue_date.isoformat()
        if self.expiry_date is not None:
            out["expiry_date"] = self.expiry_date.isoformat()
        out["type"] = self.type
        out["main"] = self.main
        out["insurance_company_id"] = self.insurance_company_id
        return out


@dataclass
class Document:
    id: uuid.UUID | None = None
    series: str | None = None
    number: str | None = None
    department_code: str | None = None
    issue_date: datetime.date | None = None
    expiry_date: datetime.date | None = None
    main: bool | None = None
    patient_id: uuid.UUID | None = None
    document_type_id: int | None = None
    document_company_id: int | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Document":
        data = _mapping(data, "document")
        return cls(
            id=_opt_uuid(data, "id"),
            series=_opt_str(data, "series"),
            number=_opt_str(data, "number"),
            department_code=_opt_str(data, "department_code"),
            issue_date=_opt_date(data, "issue_date"),
            expiry_date=_opt_date(data, "expiry_date"),
            main=_opt_bool(data, "main"),
            patient_id=_opt_uuid(data, "patient_id"),
            document_type_id=_opt_int(data, "document_type_id"),
            document_company_id=_opt_int(data, "document_company_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": _uuid_out(self.id),
            "series": self.series,
            "number": self.number,
            "department_code": self.department_code,
            "issue_date": _date_out(self.issue_date),
            "expiry_date": _date_out(self.expiry_date),
            "main": self.main,
        }
        if self.patient_id is not None:
            out["patient_id"] = str(self.patient_id)
        out["document_type_id"] = self.document_type_id
        out["document_company_id"] = self.document_company_id
        return out


@dataclass
class Patient:
    id: uuid.UUID = NIL_UUID
    first_name: str = ""
    last_name: str = ""
    middle_name: str | None = None
    birth_date: datetime.date | None = None
    gender: bool | None = None
    version: int = 0
    contact: Contact = field(default_factory=Contact)
    snils: Snils = field(default_factory=Snils)
    inn: Inn = field(default_factory=Inn)
    insurance_oms: Insurance | None = None
    insurance_dms: Insurance | None = None
    document: Document | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Patient":
        data = _mapping(data, "patient")

        def nested(key: str, kind: Any) -> Any:
            value = data.get(key)
            return None if value is None else kind.from_dict(value)

        return cls(
            id=_opt_uuid(data, "id") or NIL_UUID,
            first_name=_req_str(data, "first_name"),
            last_name=_req_str(data, "last_name"),
            middle_name=_opt_str(data, "middle_name"),
            birth_date=_opt_date(data, "birth_date"),
            gender=_opt_bool(data, "gender"),
            version=_opt_int(data, "version") or 0,
            contact=nested("contact", Contact) or Contact(),
            snils=nested("snils", Snils) or Snils(),
            inn=nested("inn", Inn) or Inn(),
            insurance_oms=nested("insurance_oms", Insurance),
            insurance_dms=nested("insurance_dms", Insurance),
            document=nested("document", Document),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "middle_name": self.middle_name,
            "birth_date": _date_out(self.birth_date),
            "gender": self.gender,
            "version": self.version,
            "contact": self.contact.to_dict(),
            "snils": self.snils.to_dict(),
            "inn": self.inn.to_dict(),
            "insurance_oms": None if self.insurance_oms is None else self.insurance_oms.to_dict(),
            "insurance_dms": None if self.insurance_dms is None else self.insurance_dms.to_dict(),
            "document": None if self.document is None else self.document.to_dict(),
        }

    def sanitize(self) -> None:
        """Drop nested records that carry no identifier."""
        if self.insurance_oms is not None and self.insurance_oms.id is None:
            self.insurance_oms = None
        if self.insurance_dms is not None and self.insurance_dms.id is None:
            self.insurance_dms = None
        if self.document is not None and self.document.id is None:
            self.document = None