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

from types import MappingProxyType
from typing import Mapping, Optional

from metagen.constants import INT64, LONG, STRING
from metagen.generation.validators import UnmappedTypeError

"""
Semantic type -> schema type mapping used by the DDL renderer.

Rules are ordered, first match wins:
  int64 / long -> BIGINT
  string       -> VARCHAR(255)
  (extra mappings from the active profile)
  anything else -> VARCHAR(255), or UnmappedTypeError when strict
"""

# Schema type keywords
BIGINT = "BIGINT"
VARCHAR_255 = "VARCHAR(255)"

FALLBACK_TYPE = VARCHAR_255

_BUILTIN_RULES = (
  ((INT64, LONG), BIGINT),
  ((STRING,), VARCHAR_255),
)


class TypeMapper:
  """Maps FieldDescriptor.type_name to a schema type keyword."""

  def __init__(self, *, strict: bool = False, extra_mappings: Optional[Mapping[str, str]] = None):
    self.strict = strict
    self.extra_mappings = MappingProxyType(dict(extra_mappings or {}))

  def is_mapped(self, type_name: str) -> bool:
    """True if a rule other than the fallback applies."""
    return self._lookup(type_name) is not None

  def map_type(self, type_name: str) -> str:
    mapped = self._lookup(type_name)
    if mapped is not None:
      return mapped
    if self.strict:
      raise UnmappedTypeError(type_name)
    return FALLBACK_TYPE

  def _lookup(self, type_name: str) -> Optional[str]:
    for names, sql_type in _BUILTIN_RULES:
      if type_name in names:
        return sql_type
    return self.extra_mappings.get(type_name)


DEFAULT_TYPE_MAPPER = TypeMapper()


def map_type(type_name: str) -> str:
  """Map with the permissive default rules."""
  return DEFAULT_TYPE_MAPPER.map_type(type_name)
