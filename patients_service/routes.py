"""URL rules binding the API handlers to a blueprint."""

from __future__ import annotations

from typing import Any, Callable

from flask import Blueprint

from .controllers import (
    ContactController,
    DocumentController,
    InnController,
    InsuranceController,
    PatientController,
    SnilsController,
    validate_uuid_param,
)

_with_uuid_id = validate_uuid_param("id")


def _add(blueprint: Blueprint, rule: str, endpoint: str, view: Callable[..., Any], method: str) -> None:
    blueprint.add_url_rule(rule, endpoint=endpoint, view_func=view, methods=[method])


def patient_routes(blueprint: Blueprint, controller: PatientController) -> None:
    _add(blueprint, "/patients/<id>", "get_patient", _with_uuid_id(controller.get_patient), "GET")
    _add(blueprint, "/patients/list/<limit>/<offset>", "get_patients", controller.get_patients, "GET")
    _add(blueprint, "/patients/", "create_patient", controller.create_patient, "POST")
    _add(blueprint, "/patients/<id>", "update_patient", _with_uuid_id(controller.update_patient), "PUT")
    _add(
        blueprint,
        "/patients/mark_deleted/<id>",
        "mark_patient_as_deleted",
        _with_uuid_id(controller.mark_patient_as_deleted),
        "PATCH",
    )
    _add(
        blueprint,
        "/patients/unmark_deleted/<id>",
        "unmark_patient_as_deleted",
        _with_uuid_id(controller.unmark_patient_as_deleted),
        "PATCH",
    )


def contact_routes(blueprint: Blueprint, controller: ContactController) -> None:
    _add(blueprint, "/contacts/<id>", "update_contact", _with_uuid_id(controller.update_contact), "PUT")


def snils_routes(blueprint: Blueprint, controller: SnilsController) -> None:
    _add(blueprint, "/snils/<id>", "update_snils", _with_uuid_id(controller.update_snils), "PUT")


def inn_routes(blueprint: Blueprint, controller: InnController) -> None:
    _add(blueprint, "/inn/<id>", "update_inn", _with_uuid_id(controller.update_inn), "PUT")


def insurance_routes(blueprint: Blueprint, controller: InsuranceController) -> None:
    _add(blueprint, "/insurance/", "create_insurance", controller.create_insurance, "POST")
    _add(blueprint, "/insurance/<id>", "update_insurance", _with_uuid_id(controller.update_insurance), "PUT")
    _add(blueprint, "/insurance/<id>", "delete_insurance", _with_uuid_id(controller.delete_insurance), "DELETE")


def document_routes(blueprint: Blueprint, controller: DocumentController) -> None:
    _add(blueprint, "/documents/", "create_document", controller.create_document, "POST")
    _add(blueprint, "/documents/<id>", "update_document", _with_uuid_id(controller.update_document), "PUT")
    _add(blueprint, "/documents/<id>", "delete_document", _with_uuid_id(controller.delete_document), "DELETE")