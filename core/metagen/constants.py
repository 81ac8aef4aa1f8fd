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

from enum import Enum


class TagKind(str, Enum):
  """Closed set of metadata tags understood by the generators."""

  BUILDER_TARGET = "BuilderTarget"
  TABLE = "Table"
  COLUMN = "Column"

  def __str__(self) -> str:
    return self.value


class ArtifactKind(str, Enum):
  """Artifacts the orchestrator can produce from a descriptor alone."""

  BUILDER = "builder"
  SCHEMA_DDL = "schema_ddl"

  def __str__(self) -> str:
    return self.value


# Tag levels
TYPE_LEVEL = "type"
FIELD_LEVEL = "field"

# Tag parameter names (kept in the annotation spelling)
PARAM_NAME = "name"
PARAM_PRIMARY_KEY = "primaryKey"
PARAM_NULLABLE = "nullable"

# Semantic type names
INT32 = "int32"
INT64 = "int64"
LONG = "long"
STRING = "string"
BOOL = "bool"
FLOAT64 = "float64"

# SQL emitted for values that could not be read
SQL_NULL = "NULL"

DEFAULT_BUILDER_LANGUAGE = "java"
