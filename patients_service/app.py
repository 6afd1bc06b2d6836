"""Wiring of the service and its command-line entry point."""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from flask import Blueprint

from .config import Config, must_load
from .controllers import (
    ContactController,
    DocumentController,
    InnController,
    InsuranceController,
    PatientController,
    SnilsController,
)
from .database import TransactionManager, connect
from .httpserver import HttpServer
from .logger import new_logger
from .repository.patient import PatientRepository
from .repository.records import (
    ContactRepository,
    DocumentRepository,
    InnRepository,
    InsuranceRepository,
    SnilsRepository,
)
from .routes import (
    contact_routes,
    document_routes,
    inn_routes,
    insurance_routes,
    patient_routes,
    snils_routes,
)
from .service import (
    ContactService,
    DocumentService,
    InnService,
    InsuranceService,
    PatientService,
    SnilsService,
)
from .sqlstore import load_sql_store
from .transaction import PatientTransaction

API_PREFIX = "/api/v1"


def build_server(cfg: Config, pg_context: Any) -> HttpServer:
    """Assemble repositories, services, controllers and routes on a new server."""
    log = new_logger(cfg.env)
    sql_store = load_sql_store(cfg.sql.path)
    tx_manager = TransactionManager(pg_context)

    patient_service = PatientService(log, PatientRepository(pg_context, sql_store))
    contact_service = ContactService(log, ContactRepository(pg_context, sql_store))
    snils_service = SnilsService(log, SnilsRepository(pg_context, sql_store))
    inn_service = InnService(log, InnRepository(pg_context, sql_store))
    insurance_service = InsuranceService(log, InsuranceRepository(pg_context, sql_store))
    document_service = DocumentService(log, DocumentRepository(pg_context, sql_store))

    transaction = PatientTransaction(
        patient_service,
        contact_service,
        snils_service,
        inn_service,
        insurance_service,
        document_service,
        tx_manager,
    )

    server = HttpServer(cfg.env, cfg.server)
    api = Blueprint("api_v1", __name__, url_prefix=API_PREFIX)

    patient_routes(api, PatientController(patient_service, transaction))
    contact_routes(api, ContactController(contact_service))
    snils_routes(api, SnilsController(snils_service))
    inn_routes(api, InnController(inn_service))
    insurance_routes(api, InsuranceController(insurance_service))
    document_routes(api, DocumentController(document_service))

    server.app.register_blueprint(api)
    return server


def run(cfg: Config) -> None:
    """Connect to the database and serve the API until stopped."""
    pg_context = connect(cfg.db)
    try:
        server = build_server(cfg, pg_context)
        server.run(cfg.server)
    finally:
        pg_context.close()


def main(argv: Sequence[str] | None = None) -> None:
    """Start the service with the configuration named by CONFIG_PATH."""
    parser = argparse.ArgumentParser(
        prog="patients-service",
        description="Patient records HTTP service. The configuration file is named by CONFIG_PATH.",
    )
    parser.parse_args(argv)
    run(must_load())