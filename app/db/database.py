"""Table-oriented helper over a SQLAlchemy session.

Results come back as plain dicts. Reads return ``False`` when nothing matches
and writes return ``False`` when the statement fails, so callers can treat
"not found" and "could not run" the same way.
"""
import logging
from collections.abc import Mapping

from sqlalchemy import MetaData, Table, func, insert, select, update, text
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.base import Base

logger = logging.getLogger(__name__)

OPERATORS = {
    "=": lambda col, value: col == value,
    "!=": lambda col, value: col != value,
    "<>": lambda col, value: col != value,
    "<": lambda col, value: col < value,
    "<=": lambda col, value: col <= value,
    ">": lambda col, value: col > value,
    ">=": lambda col, value: col >= value,
    "LIKE": lambda col, value: col.like(value),
    "NOT LIKE": lambda col, value: col.not_like(value),
    "IN": lambda col, value: col.in_(value),
    "NOT IN": lambda col, value: col.not_in(value),
}


class Database:
    # order_by marker for a random ordering
    RANDOM = "RAND()"

    def __init__(self, session: Session):
        self.session = session
        self._reflected = MetaData()

    def table(self, name: str) -> Table:
        if name in Base.metadata.tables:
            return Base.metadata.tables[name]
        if name not in self._reflected.tables:
            Table(name, self._reflected, autoload_with=self.session.get_bind())
        return self._reflected.tables[name]

    def select(self, table: str, where=None, columns="*", order_by=None):
        rows = self.select_all(table, where, columns, order_by, limit=1)
        if rows:
            return rows[0]
        return False

    def select_all(self, table: str, where=None, columns="*", order_by=None, limit=None):
        try:
            tbl = self.table(table)
            if columns == "*":
                stmt = select(tbl)
            else:
                stmt = select(*[tbl.c[name] for name in columns])
            stmt = stmt.where(*self._conditions(tbl, where))
            stmt = stmt.order_by(*self._ordering(tbl, order_by))
            if limit:
                stmt = stmt.limit(int(limit))
        except (KeyError, NoSuchTableError):
            logger.exception("Invalid select against %s", table)
            return False
        return self.query(stmt)

    def insert(self, table: str, fields: Mapping) -> bool:
        try:
            tbl = self.table(table)
            self.session.execute(insert(tbl).values(**dict(fields)))
            self.session.commit()
        except (SQLAlchemyError, NoSuchTableError, KeyError):
            self.session.rollback()
            logger.exception("Insert into %s failed", table)
            return False
        return True

    def update(self, table: str, fields: Mapping, where=None) -> bool:
        if not fields:
            return False
        try:
            tbl = self.table(table)
            stmt = update(tbl).where(*self._conditions(tbl, where)).values(**dict(fields))
            self.session.execute(stmt)
            self.session.commit()
        except (SQLAlchemyError, NoSuchTableError, KeyError):
            self.session.rollback()
            logger.exception("Update of %s failed", table)
            return False
        return True

    def query(self, statement, params=None):
        """Run a statement (SQLAlchemy construct or raw SQL string) and return rows as dicts."""
        if isinstance(statement, str):
            statement = text(statement)
        try:
            result = self.session.execute(statement, params or {})
            rows = [dict(row) for row in result.mappings()]
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Query failed")
            return False
        return rows or False

    def _conditions(self, tbl: Table, where):
        conditions = []
        for key, value in (where or {}).items():
            col = tbl.c[key]
            if isinstance(value, (tuple, list)) and len(value) == 2 and str(value[0]).upper() in OPERATORS:
                conditions.append(OPERATORS[str(value[0]).upper()](col, value[1]))
            elif value is None:
                conditions.append(col.is_(None))
            else:
                conditions.append(col == value)
        return conditions

    def _ordering(self, tbl: Table, order_by):
        if order_by is None:
            return []
        if isinstance(order_by, str):
            order_by = [order_by]
        elif isinstance(order_by, Mapping):
            order_by = list(order_by.items())
        clauses = []
        for item in order_by:
            if item == self.RANDOM:
                clauses.append(func.random())
                continue
            if isinstance(item, str):
                name, direction = item, "ASC"
            else:
                name, direction = item
            col = tbl.c[name]
            clauses.append(col.desc() if str(direction).upper() == "DESC" else col.asc())
        return clauses
