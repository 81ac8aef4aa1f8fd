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
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from metagen.constants import TagKind, PARAM_NAME, SQL_NULL
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.tags import resolve_tag
from metagen.generation.validators import FieldReadError
from metagen.introspection.base import FieldReader
from metagen.introspection.declarations import AttributeFieldReader
from metagen.rendering.ddl import resolve_table_name

"""
INSERT statement rendering for live instances of Table-tagged types.

Two forms are available:
- generate(): values embedded as literals (legacy form; textual values are
  quoted but NOT escaped)
- generate_parameterized(): named placeholders plus an ordered params dict,
  to be bound by the executing driver
"""

logger = logging.getLogger(__name__)

# Marks an unreadable field while collecting values
_UNREADABLE = object()


@dataclass(frozen=True)
class InsertStatement:
  """Parameterized INSERT: SQL text with :name placeholders and bound values."""

  sql: str
  params: Dict[str, Any] = field(default_factory=dict)
  columns: tuple = ()


def render_value_literal(value: Any, column: str = "?") -> str:
  """
  Render a read value as a SQL literal.

    'abc'  -> 'abc'   (embedded quotes are not escaped)
    None   -> NULL
    True   -> TRUE
    42     -> 42
  """
  if value is None:
    return SQL_NULL
  if isinstance(value, bool):
    return "TRUE" if value else "FALSE"
  if isinstance(value, str):
    if "'" in value:
      logger.warning(
        "Value for column %s contains a single quote and is embedded unescaped; "
        "use the parameterized insert for untrusted values.", column,
      )
    return f"'{value}'"
  return str(value)


class InsertStatementGenerator:
  """
  Emits INSERT statements for a live instance, reading each Column-tagged
  field through the FieldReader in descriptor order.

  A field that cannot be read renders as NULL and generation continues,
  unless strict_reads is set.
  """

  def __init__(self, reader: Optional[FieldReader] = None, *, strict_reads: bool = False):
    self.reader = reader or AttributeFieldReader()
    self.strict_reads = strict_reads

  def _read(self, instance: Any, f: FieldDescriptor) -> Any:
    try:
      return self.reader.read(instance, f.name)
    except FieldReadError as exc:
      if self.strict_reads:
        raise
      logger.debug("Rendering NULL for unreadable field %s: %s", f.name, exc)
      return _UNREADABLE

  def _collect(self, instance: Any, descriptor: TypeDescriptor):
    """Resolve all structure first, then read values, so errors never leave partial text."""
    table_name = resolve_table_name(descriptor)
    fields = descriptor.tagged_fields(TagKind.COLUMN)
    columns = [
      resolve_tag(TagKind.COLUMN, f.tag(TagKind.COLUMN))[PARAM_NAME]
      for f in fields
    ]
    values = [self._read(instance, f) for f in fields]
    return table_name, fields, columns, values

  def generate(self, instance: Any, descriptor: TypeDescriptor) -> str:
    table_name, _, columns, values = self._collect(instance, descriptor)
    rendered: List[str] = [
      SQL_NULL if value is _UNREADABLE else render_value_literal(value, column)
      for column, value in zip(columns, values)
    ]
    return (
      f"INSERT INTO {table_name} ({', '.join(columns)}) "
      f"VALUES ({', '.join(rendered)})"
    )

  def generate_parameterized(self, instance: Any, descriptor: TypeDescriptor) -> InsertStatement:
    """
    Placeholders are named after the descriptor fields, which are unique
    identifiers; unreadable fields render as a NULL literal and are not bound.
    """
    table_name, fields, columns, values = self._collect(instance, descriptor)
    placeholders: List[str] = []
    params: Dict[str, Any] = {}
    for f, value in zip(fields, values):
      if value is _UNREADABLE:
        placeholders.append(SQL_NULL)
        continue
      placeholders.append(f":{f.name}")
      params[f.name] = value

    sql = (
      f"INSERT INTO {table_name} ({', '.join(columns)}) "
      f"VALUES ({', '.join(placeholders)})"
    )
    return InsertStatement(sql=sql, params=params, columns=tuple(columns))
