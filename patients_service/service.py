"""Business services over the patient repositories."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Protocol

from .model import Contact, Document, Inn, Insurance, Patient, Snils


class _PatientStore(Protocol):
    def create_patient(self, tx: Any, patient: Patient) -> uuid.UUID: ...
    def update_patient(self, tx: Any, id: uuid.UUID, patient: Patient) -> None: ...
    def get_patient(self, id: uuid.UUID) -> Patient: ...
    def get_patients(self, limit: int, offset: int) -> list[Patient]: ...
    def mark_patient_as_deleted(self, id: uuid.UUID) -> None: ...
    def unmark_patient_as_deleted(self, id: uuid.UUID) -> None: ...


class _ContactStore(Protocol):
    def create_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None: ...
    def update_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None: ...


class _SnilsStore(Protocol):
    def create_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None: ...
    def update_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None: ...


class _InnStore(Protocol):
    def create_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None: ...
    def update_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None: ...


class _InsuranceStore(Protocol):
    def create_insurance(self, tx: Any, insurance: Insurance) -> None: ...
    def update_insurance(self, tx: Any, id: uuid.UUID | None, insurance: Insurance) -> None: ...
    def delete_insurance(self, id: uuid.UUID) -> None: ...


class _DocumentStore(Protocol):
    def create_document(self, tx: Any, document: Document) -> None: ...
    def update_document(self, tx: Any, id: uuid.UUID | None, document: Document) -> None: ...
    def delete_document(self, id: uuid.UUID) -> None: ...


class PatientService:
    """Operations on patients."""

    def __init__(self, log: logging.Logger | None, repository: _PatientStore) -> None:
        self.log = log
        self.repository = repository

    def create_patient(self, tx: Any, patient: Patient) -> uuid.UUID:
        return self.repository.create_patient(tx, patient)

    def update_patient(self, tx: Any, id: uuid.UUID, patient: Patient) -> None:
        self.repository.update_patient(tx, id, patient)

    def get_patient(self, id: uuid.UUID) -> Patient:
        return self.repository.get_patient(id)

    def get_patients(self, limit: int, offset: int) -> list[Patient]:
        return self.repository.get_patients(limit, offset)

    def mark_patient_as_deleted(self, id: uuid.UUID) -> None:
        self.repository.mark_patient_as_deleted(id)

    def unmark_patient_as_deleted(self, id: uuid.UUID) -> None:
        self.repository.unmark_patient_as_deleted(id)


class ContactService:
    """Operations on patient contacts."""

    def __init__(self, log: logging.Logger | None, repository: _ContactStore) -> None:
        self.log = log
        self.repository = repository

    def create_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None:
        self.repository.create_contact(tx, id, contact)

    def update_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None:
        self.repository.update_contact(tx, id, contact)


class SnilsService:
    """Operations on SNILS numbers."""

    def __init__(self, log: logging.Logger | None, repository: _SnilsStore) -> None:
        self.log = log
        self.repository = repository

    def create_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None:
        self.repository.create_snils(tx, id, snils)

    def update_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None:
        self.repository.update_snils(tx, id, snils)


class InnService:
    """Operations on INN numbers."""

    def __init__(self, log: logging.Logger | None, repository: _InnStore) -> None:
        self.log = log
        self.repository = repository

    def create_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None:
        self.repository.create_inn(tx, id, inn)

    def update_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None:
        self.repository.update_inn(tx, id, inn)


class InsuranceService:
    """Operations on insurance policies."""

    def __init__(self, log: logging.Logger | None, repository: _InsuranceStore) -> None:
        self.log = log
        self.repository = repository

    def create_insurance(self, tx: Any, insurance: Insurance) -> None:
        self.repository.create_insurance(tx, insurance)

    def update_insurance(self, tx: Any, id: uuid.UUID | None, insurance: Insurance) -> None:
        self.repository.update_insurance(tx, id, insurance)

    def delete_insurance(self, id: uuid.UUID) -> None:
        self.repository.delete_insurance(id)


class DocumentService:
    """Operations on identity documents."""

    def __init__(self, log: logging.Logger | None, repository: _DocumentStore) -> None:
        self.log = log
        self.repository = repository

    def create_document(self, tx: Any, document: Document) -> None:
        self.repository.create_document(tx, document)

    def update_document(self, tx: Any, id: uuid.UUID | None, document: Document) -> None:
        self.repository.update_document(tx, id, document)

    def delete_document(self, id: uuid.UUID) -> None:
        self.repository.delete_document(id)