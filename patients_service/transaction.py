"""Patient writes that span several records in one database transaction."""

from __future__ import annotations

import uuid
from contextlib import suppress
from typing import Any, Callable

from .model import Patient


class TransactionError(Exception):
    """Raised when a multi-record patient write fails."""


def _step(message: str, action: Callable[..., Any], *args: Any) -> Any:
    try:
        return action(*args)
    except Exception as exc:
        raise TransactionError(f"{message}: {exc}") from exc


class PatientTransaction:
    """Creates and updates a patient together with all attached records."""

    def __init__(
        self,
        patient_service: Any,
        contact_service: Any,
        snils_service: Any,
        inn_service: Any,
        insurance_service: Any,
        document_service: Any,
        tx_manager: Any,
    ) -> None:
        self.patient_service = patient_service
        self.contact_service = contact_service
        self.snils_service = snils_service
        self.inn_service = inn_service
        self.insurance_service = insurance_service
        self.document_service = document_service
        self.tx_manager = tx_manager

    def _in_transaction(self, work: Callable[[Any], None]) -> None:
        tx = _step("failed to begin transaction", self.tx_manager.begin_transaction)
        committed = False
        try:
            work(tx)
            _step("failed to commit transaction", self.tx_manager.commit_transaction, tx)
            committed = True
        finally:
            if not committed:
                with suppress(Exception):
                    self.tx_manager.rollback_transaction(tx)

    def create_patient(self, patient: Patient) -> None:
        """Store a new patient and its contact, numbers, policies and document."""

        def work(tx: Any) -> None:
            new_id = _step("failed to save patient", self.patient_service.create_patient, tx, patient)
            _step("failed to save contact", self.contact_service.create_contact, tx, new_id, patient.contact)
            _step("failed to save snils", self.snils_service.create_snils, tx, new_id, patient.snils)
            _step("failed to save inn", self.inn_service.create_inn, tx, new_id, patient.inn)
            if patient.insurance_oms is not None:
                patient.insurance_oms.patient_id = new_id
                _step(
                    "failed to save insurance OMS",
                    self.insurance_service.create_insurance,
                    tx,
                    patient.insurance_oms,
                )
            if patient.insurance_dms is not None:
                patient.insurance_dms.patient_id = new_id
                _step(
                    "failed to save insurance DMS",
                    self.insurance_service.create_insurance,
                    tx,
                    patient.insurance_dms,
                )
            if patient.document is not None:
                patient.document.patient_id = new_id
                _step("failed to save document", self.document_service.create_document, tx, patient.document)

        self._in_transaction(work)

    def update_patient(self, id: uuid.UUID, patient: Patient) -> None:
        """Update a patient and all its attached records."""

        def work(tx: Any) -> None:
            _step("failed to update patient", self.patient_service.update_patient, tx, id, patient)
            _step("failed to update contact", self.contact_service.update_contact, tx, id, patient.contact)
            _step("failed to update snils", self.snils_service.update_snils, tx, id, patient.snils)
            _step("failed to update inn", self.inn_service.update_inn, tx, id, patient.inn)
            for insurance in (patient.insurance_oms, patient.insurance_dms):
                if insurance is not None:
                    _step(
                        "failed to update insurance",
                        self.insurance_service.update_insurance,
                        tx,
                        insurance.id,
                        insurance,
                    )
            if patient.document is not None:
                _step(
                    "failed to update document",
                    self.document_service.update_document,
                    tx,
                    patient.document.id,
                    patient.document,
                )

        self._in_transaction(work)