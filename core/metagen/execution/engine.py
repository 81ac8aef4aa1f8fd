"""
metagen - Metadata-driven Code & SQL Generator
Copyright © 2025 Ilona Tag

This file is part of metagen.

metagen is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as
published by the Free Software Foundation, either version 3 of
the License, or (at your option) any later version.

metagen is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with metagen. If not, see <https://www.gnu.org/licenses/>.

Contact: <https://github.com/elevata-labs/metagen>.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from metagen.rendering.dml import InsertStatement

"""
Execution of generated SQL.

The generators never touch a database; this module is the consumer side
used by callers (and the test-suite) to run generated DDL and inserts.
"""

logger = logging.getLogger(__name__)


class BaseExecutionEngine:
  def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int | None:
    raise NotImplementedError


class SqlAlchemyExecutionEngine(BaseExecutionEngine):
  """Executes generated statements through a SQLAlchemy engine."""

  def __init__(self, url_or_engine: Union[str, Engine]):
    if isinstance(url_or_engine, Engine):
      self.engine = url_or_engine
    else:
      if not url_or_engine:
        raise ValueError("SqlAlchemyExecutionEngine requires a database URL or Engine.")
      self.engine = create_engine(url_or_engine)

  def execute(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int | None:
    """
    Run one statement in its own transaction.

    Statements with params go through text() so :name placeholders are bound;
    literal statements are passed to the driver untouched, so colons inside
    string literals are never mistaken for placeholders.
    """
    logger.debug("Executing SQL: %s", sql)
    with self.engine.begin() as conn:
      if params is not None:
        result = conn.execute(text(sql), dict(params))
      else:
        result = conn.exec_driver_sql(sql)

      # rowcount may be -1 depending on statement type
      rowcount = result.rowcount
      return rowcount if rowcount is not None and rowcount >= 0 else None

  def execute_insert(self, statement: Union[str, InsertStatement]) -> int | None:
    if isinstance(statement, InsertStatement):
      return self.execute(statement.sql, statement.params)
    return self.execute(statement)

  def dispose(self) -> None:
    self.engine.dispose()
