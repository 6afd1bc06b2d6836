import uuid

import pytest

from patients_service.app import build_server, main
from patients_service.config import Config, ConfigError, SqlConfig
from patients_service.sqlstore import SqlStoreError

SNILS_SQL = "UPDATE snils\n   SET number = $2\n WHERE patient_id = $1;"
MARK_SQL = "UPDATE patients SET deleted = true,\n updated_by = $2 WHERE id = $1;"


class FakePg:
    def __init__(self, rows=(), row=None, affected=1):
        self.rows = list(rows)
        self.row = row
        self.affected = affected
        self.calls = []

    def execute(self, tx, query, *args):
        self.calls.append(("execute", tx, query, args))
        return self.affected

    def query_row(self, tx, query, *args):
        self.calls.append(("query_row", tx, query, args))
        return self.row

    def query(self, query, *args):
        self.calls.append(("query", None, query, args))
        return list(self.rows)


@pytest.fixture
def sql_dir(tmp_path):
    sub = tmp_path / "patients"
    sub.mkdir()
    (sub / "update_snils.sql").write_text(SNILS_SQL)
    (sub / "mark_deleted_patient.sql").write_text(MARK_SQL)
    (sub / "get_patient_by_id.sql").write_text("SELECT * FROM patients WHERE id = $1;")
    (sub / "get_patients.sql").write_text("SELECT * FROM patients LIMIT $1 OFFSET $2;")
    return tmp_path


def make_client(sql_dir, pg):
    cfg = Config(sql=SqlConfig(path=str(sql_dir)), env="prod")
    return build_server(cfg, pg).app.test_client()


def test_invalid_uuid_is_rejected(sql_dir):
    pg = FakePg()
    response = make_client(sql_dir, pg).get("/api/v1/patients/not-a-uuid")
    assert response.status_code == 400
    assert response.get_json() == {"error": "invalid UUID format"}
    assert pg.calls == []


def test_missing_patient_reports_error(sql_dir):
    patient_id = uuid.uuid4()
    response = make_client(sql_dir, FakePg(row=None)).get(f"/api/v1/patients/{patient_id}")
    assert response.status_code == 500
    assert response.get_json() == {"error": f"patient with id {patient_id} not found"}


def test_empty_listing_is_null(sql_dir):
    pg = FakePg(rows=[])
    response = make_client(sql_dir, pg).get("/api/v1/patients/list/10/0")
    assert response.status_code == 200
    assert response.get_json() is None
    assert pg.calls[0][3] == (10, 0)


def test_update_snils_runs_collapsed_query(sql_dir):
    pg = FakePg()
    patient_id = uuid.uuid4()
    response = make_client(sql_dir, pg).put(f"/api/v1/snils/{patient_id}", json={"number": "123"})
    assert response.status_code == 200
    assert response.get_json() == {"message": "Snils updated successfully"}
    kind, tx, query, args = pg.calls[0]
    assert query == " ".join(SNILS_SQL.split())
    assert args == (patient_id, "123")
    assert tx is None


def test_mark_deleted_passes_audit_user(sql_dir):
    pg = FakePg()
    patient_id = uuid.uuid4()
    client = make_client(sql_dir, pg)
    response = client.open(f"/api/v1/patients/mark_deleted/{patient_id}", method="PATCH")
    assert response.status_code == 200
    assert pg.calls[0][3] == (patient_id, "admin")


def test_routes_live_under_api_prefix(sql_dir):
    response = make_client(sql_dir, FakePg()).get(f"/patients/{uuid.uuid4()}")
    assert response.status_code == 404


def test_missing_query_file_reports_error(sql_dir):
    response = make_client(sql_dir, FakePg()).put(f"/api/v1/inn/{uuid.uuid4()}", json={"number": "1"})
    assert response.status_code == 500
    assert response.get_json() == {"error": "SQL query update_inn.sql not found"}


def test_build_server_requires_sql_directory(tmp_path):
    cfg = Config(sql=SqlConfig(path=str(tmp_path / "missing")))
    with pytest.raises(SqlStoreError):
        build_server(cfg, FakePg())


def test_main_without_config_path(monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    with pytest.raises(ConfigError) as info:
        main([])
    assert str(info.value) == "config path is empty"


def test_main_with_missing_config_file(monkeypatch, tmp_path):
    missing = tmp_path / "absent.yaml"
    monkeypatch.setenv("CONFIG_PATH", str(missing))
    with pytest.raises(ConfigError) as info:
        main([])
    assert str(info.value) == f"config file does not exist: {missing}"