"""Storage of the records attached to a patient."""

from __future__ import annotations

import uuid
from typing import Any

from ..model import Contact, Document, Inn, Insurance, Snils
from .patient import _Repository


class ContactRepository(_Repository):
    def create_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None:
        self._execute(
            tx,
            "insert_contact.sql",
            "error creating contact",
            id,
            contact.phone_number,
            contact.work_phone_number,
            contact.email,
        )

    def update_contact(self, tx: Any, id: uuid.UUID, contact: Contact) -> None:
        self._execute(
            tx,
            "update_contact.sql",
            "error update contact",
            id,
            contact.phone_number,
            contact.work_phone_number,
            contact.email,
        )


class SnilsRepository(_Repository):
    def create_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None:
        self._execute(tx, "insert_snils.sql", "error creating snils", id, snils.number)

    def update_snils(self, tx: Any, id: uuid.UUID, snils: Snils) -> None:
        self._execute(tx, "update_snils.sql", "error update snils", id, snils.number)


class InnRepository(_Repository):
    def create_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None:
        self._execute(tx, "insert_inn.sql", "error creating inn", id, inn.number)

    def update_inn(self, tx: Any, id: uuid.UUID, inn: Inn) -> None:
        self._execute(tx, "update_inn.sql", "error update inn", id, inn.number)


class InsuranceRepository(_Repository):
    def create_insurance(self, tx: Any, insurance: Insurance) -> None:
        self._execute(
            tx,
            "insert_insurance_policies.sql",
            "error creating insurance policy",
            insurance.patient_id,
            insurance.number,
            insurance.issue_date,
            insurance.expiry_date,
            insurance.type,
            insurance.main,
            insurance.insurance_company_id,
        )

    def update_insurance(self, tx: Any, id: uuid.UUID | None, insurance: Insurance) -> None:
        self._execute(
            tx,
            "update_insurance_policies.sql",
            "error update insurance policy",
            id,
            insurance.number,
            insurance.issue_date,
            insurance.expiry_date,
            insurance.type,
            insurance.insurance_company_id,
        )

    def delete_insurance(self, id: uuid.UUID) -> None:
        self._execute_plain("delete_insurance_policies.sql", "error delete insurance policy", id)


class DocumentRepository(_Repository):
    def create_document(self, tx: Any, document: Document) -> None:
        self._execute(
            tx,
            "insert_document.sql",
            "error creating document",
            document.patient_id,
            document.series,
            document.number,
            document.department_code,
            document.issue_date,
            document.expiry_date,
            document.main,
            document.document_type_id,
            document.document_company_id,
        )

    def update_document(self, tx: Any, id: uuid.UUID | None, document: Document) -> None:
        self._execute(
            tx,
            "update_document.sql",
            "error update document policy",
            id,
            document.series,
            document.number,
            document.department_code,
            document.issue_date,
            document.expiry_date,
            document.main,
            document.document_type_id,
            document.document_company_id,
        )

    def delete_document(self, id: uuid.UUID) -> None:
        self._execute_plain("delete_document.sql", "error delete document", id)