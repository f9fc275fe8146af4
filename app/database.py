# app/database.py
"""
File-backed document store using CSV (preferred) or Excel (xlsx) tables.

Every table is a file inside DATA_DIR; every row is a flat document whose
values are kept as strings. Strings such as "NA" or "null" are read back
verbatim; only empty cells are empty. Besides the basic CRUD primitives
the store evaluates small Mongo-style predicates, so callers can express queries as
plain dicts:

    db.find("products", {"categoryId": cid, "price": {"$exists": True, "$gte": 10}}, skip=0, limit=10)
    db.count("products", {"name": {"$regex": "Lamp"}})

Supported operators: $exists, $eq, $gt, $gte, $lt, $lte, $regex. A bare value
means exact match on the stored string form. Writes take a per-table file lock.
"""

import logging
import operator
import re
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

import pandas as pd
from filelock import FileLock

from app.core.errors import InvalidQuery, StoreError

logger = logging.getLogger(__name__)

ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")

_COMPARATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def new_id() -> str:
    return uuid.uuid4().hex


def is_valid_id(value: Any) -> bool:
    """True if `value` has the shape of an identifier generated by the store."""
    return isinstance(value, str) and bool(ID_PATTERN.match(value))


class FileBackedDB:
    """
    Manages CSV / Excel tables inside `data_dir`.
    `tables` maps logical table names to file names; unknown tables fall back
    to `<table>.csv`.
    """

    def __init__(self, data_dir: Path, tables: Optional[Mapping[str, str]] = None):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.tables = dict(tables or {})

    def _file_path(self, table: str) -> Path:
        # allow passing explicit filenames
        if table.endswith(".csv") or table.endswith(".xlsx"):
            return self.data_dir / Path(table)
        filename = self.tables.get(table, f"{table}.csv")
        return self.data_dir / Path(filename)

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock")

    def _read_df(self, table: str) -> pd.DataFrame:
        path = self._file_path(table)
        if not path.exists():
            return pd.DataFrame()
        try:
            if path.suffix.lower() in (".xls", ".xlsx"):
                return pd.read_excel(path, dtype=str, keep_default_na=False).fillna("")
            return pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (OSError, pd.errors.ParserError) as exc:
            logger.exception("Failed to read table %s from %s", table, path)
            raise StoreError(f"Could not read table '{table}'") from exc

    def _write_df_nolock(self, table: str, df: pd.DataFrame) -> None:
        """
        Write DataFrame for `table` WITHOUT acquiring the file lock.
        Use this only when the caller already holds the lock.
        """
        path = self._file_path(table)
        try:
            if path.suffix.lower() in (".xls", ".xlsx"):
                df.to_excel(path, index=False)
            else:
                df.to_csv(path, index=False)
        except OSError as exc:
            logger.exception("Failed to write table %s to %s", table, path)
            raise StoreError(f"Could not write table '{table}'") from exc

    # --- predicate evaluation ---

    def _apply_operator(self, column: pd.Series, field: str, op: str, operand: Any) -> pd.Series:
        if op == "$exists":
            present = column != ""
            return present if operand else ~present
        if op == "$eq":
            return column == str(operand)
        if op in _COMPARATORS:
            try:
                bound = float(operand)
            except (TypeError, ValueError):
                raise InvalidQuery([(field, f"{op} expects a number, got {operand!r}")])
            # non-numeric stored values coerce to NaN and never match
            numeric = pd.to_numeric(column, errors="coerce")
            return _COMPARATORS[op](numeric, bound)
        if op == "$regex":
            try:
                pattern = re.compile(str(operand))
            except re.error as exc:
                raise InvalidQuery([(field, f"invalid pattern: {exc}")])
            return column.map(lambda v: pattern.search(v) is not None).astype(bool)
        raise InvalidQuery([(field, f"unsupported operator {op}")])

    def _match(self, df: pd.DataFrame, predicate: Mapping[str, Any]) -> pd.Series:
        mask = pd.Series(True, index=df.index)
        for field, condition in predicate.items():
            if field in df.columns:
                column = df[field].astype(str)
            else:
                column = pd.Series("", index=df.index, dtype=str)
            if isinstance(condition, Mapping):
                for op, operand in condition.items():
                    mask &= self._apply_operator(column, field, op, operand)
            else:
                mask &= column == str(condition)
        return mask

    @staticmethod
    def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
        return df.where(pd.notnull(df), "").to_dict(orient="records")

    # --- queries ---

    def find(
        self,
        table: str,
        predicate: Optional[Mapping[str, Any]] = None,
        skip: int = 0,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Return rows matching `predicate` in storage order, skipping `skip`
        rows and returning at most `limit` (no limit when None or 0).
        """
        df = self._read_df(table)
        if df.empty:
            return []
        df = df[self._match(df, predicate or {})]
        if skip:
            df = df.iloc[skip:]
        if limit:
            df = df.iloc[:limit]
        return self._records(df)

    def count(self, table: str, predicate: Optional[Mapping[str, Any]] = None) -> int:
        df = self._read_df(table)
        if df.empty:
            return 0
        return int(self._match(df, predicate or {}).sum())

    # --- high-level CRUD primitives ---

    def list_records(self, table: str) -> List[Dict[str, Any]]:
        return self.find(table)

    def get_record(self, table: str, key: str, value: Any) -> Optional[Dict[str, Any]]:
        df = self._read_df(table)
        if df.empty or key not in df.columns:
            return None
        # treat everything as string for comparison simplicity
        mask = df[key].astype(str) == str(value)
        if not mask.any():
            return None
        return self._records(df[mask].iloc[:1])[0]

    def create_record(self, table: str, data: Dict[str, Any], id_field: str = "_id") -> Dict[str, Any]:
        """
        Create a new record. If id_field not present in `data`, one will be generated (uuid4 hex).
        Returns the saved record (with id).
        """
        record = dict(data)
        if not record.get(id_field):
            record[id_field] = new_id()
        new_row = {k: ("" if v is None else v) for k, v in record.items()}
        path = self._file_path(table)
        with self._lock_for(path):
            df = self._read_df(table)
            df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True, sort=False)
            self._write_df_nolock(table, df)
        return record

    def update_record(self, table: str, key: str, value: Any, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Update rows where df[key] == value with fields in updates. Returns the updated first row dict or None.
        """
        path = self._file_path(table)
        with self._lock_for(path):
            df = self._read_df(table)
            if df.empty or key not in df.columns:
                return None
            mask = df[key].astype(str) == str(value)
            if not mask.any():
                return None
            for k, v in updates.items():
                if k not in df.columns:
                    df[k] = ""
                df[k] = df[k].astype(object)
                df.loc[mask, k] = "" if v is None else v
            self._write_df_nolock(table, df)
            return self._records(df[mask].iloc[:1])[0]

    def delete_record(self, table: str, key: str, value: Any) -> Optional[Dict[str, Any]]:
        """
        Delete all records where df[key] == value. Returns the first removed row, or None if nothing matched.
        """
        path = self._file_path(table)
        with self._lock_for(path):
            df = self._read_df(table)
            if df.empty or key not in df.columns:
                return None
            mask = df[key].astype(str) == str(value)
            if not mask.any():
                return None
            removed = self._records(df[mask].iloc[:1])[0]
            self._write_df_nolock(table, df[~mask])
            return removed


def create_db(settings) -> FileBackedDB:
    """Build the store for the given settings (see app.config.Settings)."""
    return FileBackedDB(
        settings.DATA_DIR,
        tables={
            "products": settings.PRODUCTS_FILE,
            "categories": settings.CATEGORIES_FILE,
            "suppliers": settings.SUPPLIERS_FILE,
        },
    )
