"""A store of SQL queries loaded from a directory tree."""

from __future__ import annotations

import os
from pathlib import Path


class SqlStoreError(Exception):
    """Raised when queries cannot be loaded or looked up."""


class QueryNotFoundError(SqlStoreError):
    """Raised when a named query is not in the store."""


class SqlStore:
    """Queries keyed by file name, with whitespace collapsed."""

    def __init__(self, queries: dict[str, str]) -> None:
        self.queries = dict(queries)

    def get_query(self, query_name: str) -> str:
        try:
            return self.queries[query_name]
        except KeyError:
            raise QueryNotFoundError(f"SQL query {query_name} not found") from None


def _sorted_entries(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def load_sql_store(sql_path: str | os.PathLike[str]) -> SqlStore:
    """Read every *.sql file from the immediate subdirectories of sql_path."""
    root = Path(sql_path)
    try:
        dirs = _sorted_entries(root)
    except OSError as exc:
        raise SqlStoreError(f"failed to read SQL directory: {exc}") from exc

    queries: dict[str, str] = {}
    for directory in dirs:
        if not directory.is_dir():
            continue
        full_path = root / directory.name
        try:
            files = _sorted_entries(full_path)
        except OSError as exc:
            raise SqlStoreError(f"failed to read subdirectory {full_path}: {exc}") from exc
        for file in files:
            if file.is_dir() or not file.name.endswith(".sql"):
                continue
            try:
                content = (full_path / file.name).read_bytes()
            except OSError as exc:
                raise SqlStoreError(f"failed to read file {file.name}: {exc}") from exc
            queries[file.name] = b" ".join(content.split()).decode("utf-8")

    if not queries:
        raise SqlStoreError(f"no .sql files loaded from: {root}")
    return SqlStore(queries)