import logging
import uuid

import pytest

from patients_service.model import Contact, Document, Inn, Insurance, Patient, Snils
from patients_service.repository.patient import RepositoryError
from patients_service.service import (
    ContactService,
    DocumentService,
    InnService,
    InsuranceService,
    PatientService,
    SnilsService,
)

LOG = logging.getLogger("test_service")


class RecordingRepo:
    """Records every call; returns preset results or raises a preset error."""

    def __init__(self, results=None, error=None):
        self.calls = []
        self.results = results or {}
        self.error = error

    def __getattr__(self, name):
        def method(*args):
            self.calls.append((name, args))
            if self.error is not None:
                raise self.error
            return self.results.get(name)

        return method


def test_patient_create_returns_repository_id():
    new_id = uuid.uuid4()
    repo = RecordingRepo(results={"create_patient": new_id})
    service = PatientService(LOG, repo)
    patient = Patient(first_name="Ivan")
    assert service.create_patient("tx", patient) == new_id
    assert repo.calls == [("create_patient", ("tx", patient))]


def test_patient_get_and_list_pass_through():
    patient = Patient(first_name="Anna")
    repo = RecordingRepo(results={"get_patient": patient, "get_patients": [patient]})
    service = PatientService(LOG, repo)
    pid = uuid.uuid4()
    assert service.get_patient(pid) is patient
    assert service.get_patients(10, 20) == [patient]
    assert repo.calls == [("get_patient", (pid,)), ("get_patients", (10, 20))]


def test_patient_update_and_marks_forward_arguments():
    repo = RecordingRepo()
    service = PatientService(LOG, repo)
    pid = uuid.uuid4()
    patient = Patient()
    service.update_patient(None, pid, patient)
    service.mark_patient_as_deleted(pid)
    service.unmark_patient_as_deleted(pid)
    assert [name for name, _ in repo.calls] == [
        "update_patient",
        "mark_patient_as_deleted",
        "unmark_patient_as_deleted",
    ]
    assert repo.calls[0][1] == (None, pid, patient)


def test_patient_errors_propagate_unchanged():
    error = RepositoryError("error update patient. Version in DB is higher")
    service = PatientService(LOG, RecordingRepo(error=error))
    with pytest.raises(RepositoryError) as info:
        service.update_patient(None, uuid.uuid4(), Patient())
    assert info.value is error


@pytest.mark.parametrize(
    "service_cls, method, record",
    [
        (ContactService, "create_contact", Contact(email="user@example.com")),
        (ContactService, "update_contact", Contact(phone_number="1")),
        (SnilsService, "create_snils", Snils(number="x")),
        (SnilsService, "update_snils", Snils(number="y")),
        (InnService, "create_inn", Inn(number="x")),
        (InnService, "update_inn", Inn(number="y")),
        (InsuranceService, "update_insurance", Insurance(number="a")),
        (DocumentService, "update_document", Document(series="b")),
    ],
)
def test_record_services_forward_tx_id_and_record(service_cls, method, record):
    repo = RecordingRepo()
    service = service_cls(LOG, repo)
    rid = uuid.uuid4()
    getattr(service, method)("tx", rid, record)
    assert repo.calls == [(method, ("tx", rid, record))]


@pytest.mark.parametrize(
    "service_cls, method, record",
    [
        (InsuranceService, "create_insurance", Insurance(number="a")),
        (DocumentService, "create_document", Document(number="b")),
    ],
)
def test_create_without_id(service_cls, method, record):
    repo = RecordingRepo()
    getattr(service_cls(LOG, repo), method)("tx", record)
    assert repo.calls == [(method, ("tx", record))]


@pytest.mark.parametrize(
    "service_cls, method",
    [(InsuranceService, "delete_insurance"), (DocumentService, "delete_document")],
)
def test_delete_forwards_id(service_cls, method):
    repo = RecordingRepo()
    rid = uuid.uuid4()
    getattr(service_cls(LOG, repo), method)(rid)
    assert repo.calls == [(method, (rid,))]


def test_delete_error_propagates():
    error = RepositoryError("error delete document")
    service = DocumentService(LOG, RecordingRepo(error=error))
    with pytest.raises(RepositoryError, match="error delete document"):
        service.delete_document(uuid.uuid4())


def test_contact_error_propagates():
    error = RepositoryError("error creating contact: boom")
    service = ContactService(None, RecordingRepo(error=error))
    with pytest.raises(RepositoryError) as info:
        service.create_contact(None, uuid.uuid4(), Contact())
    assert info.value is error