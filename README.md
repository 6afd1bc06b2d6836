# patients-service

An HTTP service for keeping patient records. A patient has a name, a
birth date and a gender. It also has contact details, SNILS and INN
numbers, optional compulsory (OMS) and voluntary (DMS) insurance
policies, and an identity document. The data is stored in PostgreSQL
through SQLAlchemy. The SQL statements are read from plain `.sql` files
when the service starts.

## Installing

```
pip install .
```

## What is not included

- **No database driver.** The connection URL uses the `postgresql`
  dialect, so a PostgreSQL driver that SQLAlchemy can use must already be
  installed.
- **No database schema and no `.sql` files.** You provide the tables and
  the statements yourself (see below).
- **No sample configuration file.**

## Configuration

The service reads a YAML file. The path to the file is taken from the
`CONFIG_PATH` environment variable (see `patients_service.config.must_load`).
Keys that are missing fall back to the defaults shown here:

```yaml
env: local            # "local": text logs at DEBUG, Flask debug on
                      # "prod": JSON logs at INFO, Flask debug off
server:
  host: localhost
  port: 8080
db:
  host: localhost
  port: 5432
  user: postgres
  password: password
  db_name: patients_db
  ssl_mode: disable   # read into DbConfig, not used in the connection URL
sql:
  path: ./sql         # required
```

The loader raises `patients_service.config.ConfigError` in these cases:

- `CONFIG_PATH` is empty.
- The file does not exist.
- The file cannot be parsed.
- `sql.path` is missing.

### SQL statements

`sql.path` must be a directory. Its immediate sub-directories hold the
`.sql` files, for example `sql/patient/insert_patient.sql`.

- Each statement is known by its file name.
- Runs of whitespace in a statement are collapsed to single spaces when
  it is loaded (`patients_service.sqlstore.load_sql_store`).
- Loading fails with `SqlStoreError` if no `.sql` file is found.
- Statements use PostgreSQL-style positional parameters (`$1`, `$2`, ...).
  These are turned into bound parameters before they are run.

The service uses these statements:

- `insert_patient.sql`: must return the new patient id
- `get_patient_by_id.sql`
- `get_patients.sql`: parameters are `limit` and `offset`
- `update_patient.sql`: must affect no rows when the stored version is newer
- `mark_deleted_patient.sql`
- `unmark_deleted_patient.sql`
- `insert_contact.sql`
- `update_contact.sql`
- `insert_snils.sql`
- `update_snils.sql`
- `insert_inn.sql`
- `update_inn.sql`
- `insert_insurance_policies.sql`
- `update_insurance_policies.sql`
- `delete_insurance_policies.sql`
- `insert_document.sql`
- `update_document.sql`
- `delete_document.sql`

The column order that the select statements must return is set by
`patients_service.repository.patient`:

- `get_patient_by_id.sql` returns 35 columns.
- `get_patients.sql` returns 21 columns.

## Running

```
CONFIG_PATH=config/local.yaml patients-service
```

The command does the following:

1. Loads the configuration.
2. Connects to the database and checks the connection with `SELECT 1`.
3. Loads the SQL statements.
4. Serves the API with Flask's built-in server on `server.host:server.port`.

To embed the application instead, call
`patients_service.app.build_server(cfg, pg_context)`. It returns an
`HttpServer` whose `app` attribute is the Flask application.

## API

All routes are under `/api/v1`.

| Method | Path | Action |
|--------|------|--------|
| GET    | `/patients/{id}` | fetch one patient |
| GET    | `/patients/list/{limit}/{offset}` | list patients |
| POST   | `/patients/` | create a patient and its nested records in one transaction |
| PUT    | `/patients/{id}` | update a patient and its nested records in one transaction |
| PATCH  | `/patients/mark_deleted/{id}` | mark a patient as deleted |
| PATCH  | `/patients/unmark_deleted/{id}` | clear the deleted mark |
| PUT    | `/contacts/{id}` | update a patient's contacts |
| PUT    | `/snils/{id}` | update a patient's SNILS |
| PUT    | `/inn/{id}` | update a patient's INN |
| POST   | `/insurance/` | add an insurance policy |
| PUT    | `/insurance/{id}` | update an insurance policy |
| DELETE | `/insurance/{id}` | delete an insurance policy |
| POST   | `/documents/` | add a document |
| PUT    | `/documents/{id}` | update a document |
| DELETE | `/documents/{id}` | delete a document |

### Responses

| Situation | Status | Body |
|-----------|--------|------|
| `{id}` is not a UUID | 400 | `{"error": "invalid UUID format"}` |
| Request body cannot be read into the record | 400 | `{"error": "Invalid input", "details": ...}` |
| Database or service failure | 500 | `{"error": ...}` |
| Successful write | 200 | `{"message": ...}` |

Other behaviour:

- A list request whose `limit` or `offset` is not an integer gets 400
  with `{"error": "Invalid limit"}` or `{"error": "Invalid offset"}`.
- An empty page is returned as `null`.
- The mark and unmark routes return `null` on success.

### Transactions

Creating or updating a patient writes the patient first. It then writes
the contact, SNILS, INN, OMS policy, DMS policy and document, each one
only if it is present. Everything runs inside one transaction, and any
failure rolls the whole transaction back.

A patient update carries a `version` field. If the stored version is
newer, the update is refused with "error update patient. Version in DB
is higher".

### Example body for creating a patient

```json
{
  "first_name": "Ivan",
  "last_name": "Petrov",
  "middle_name": null,
  "birth_date": "1990-05-17",
  "gender": true,
  "contact": {"phone_number": null, "work_phone_number": null, "email": "ivan@example.com"},
  "snils": {"number": null},
  "inn": {"number": null},
  "insurance_oms": null,
  "insurance_dms": null,
  "document": null
}
```

## Tests

```
pip install ".[test]"
pytest
```