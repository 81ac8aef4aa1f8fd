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

from typing import Optional

from metagen.constants import TagKind, PARAM_NAME, PARAM_PRIMARY_KEY, PARAM_NULLABLE
from metagen.descriptors import TypeDescriptor
from metagen.generation.tags import resolve_tag
from metagen.generation.types_map import TypeMapper, DEFAULT_TYPE_MAPPER
from metagen.generation.validators import require_type_tag


def resolve_table_name(descriptor: TypeDescriptor) -> str:
  """Table.name of a Table-tagged descriptor."""
  require_type_tag(descriptor, TagKind.TABLE)
  params = resolve_tag(TagKind.TABLE, descriptor.type_tag(TagKind.TABLE))
  return params[PARAM_NAME]


class SchemaDDLGenerator:
  """
  Emits a CREATE TABLE statement for a Table-tagged type.

  Only Column-tagged fields become columns, in descriptor order:

    CREATE TABLE people (name VARCHAR(255) NOT NULL, age BIGINT)

  A table without Column-tagged fields renders as `CREATE TABLE people ()`.
  """

  def __init__(self, type_mapper: Optional[TypeMapper] = None):
    self.type_mapper = type_mapper or DEFAULT_TYPE_MAPPER

  def render_column(self, field) -> str:
    params = resolve_tag(TagKind.COLUMN, field.tag(TagKind.COLUMN))
    clause = f"{params[PARAM_NAME]} {self.type_mapper.map_type(field.type_name)}"
    if params[PARAM_PRIMARY_KEY]:
      clause += " PRIMARY KEY"
    if not params[PARAM_NULLABLE]:
      clause += " NOT NULL"
    return clause

  def generate(self, descriptor: TypeDescriptor) -> str:
    table_name = resolve_table_name(descriptor)
    columns = [
      self.render_column(f)
      for f in descriptor.tagged_fields(TagKind.COLUMN)
    ]
    return f"CREATE TABLE {table_name} ({', '.join(columns)})"
