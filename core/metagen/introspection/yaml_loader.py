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
from pathlib import Path
from typing import Any, Dict, IO, Mapping, Union

import yaml

from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import FieldReadError, InvalidDescriptorError

"""
Type descriptors declared in YAML.

  types:
    - name: Person
      namespace: com.training.orm
      tags:
        Table: {name: people}
        BuilderTarget:
      fields:
        - {name: name, type: string, tags: {Column: {name: name, nullable: false}}}
        - {name: age, type: int64, tags: {Column: {name: age}}}
        - {name: nickname, type: string}

Field order in the document is the descriptor field order.
"""

logger = logging.getLogger(__name__)


def _require(entry: Mapping[str, Any], key: str, context: str) -> Any:
  value = entry.get(key)
  if value in (None, ""):
    raise InvalidDescriptorError(f"{context}: missing required key '{key}'.")
  return value


def _build_field(entry: Any, type_name: str, index: int) -> FieldDescriptor:
  context = f"type '{type_name}', field #{index + 1}"
  if not isinstance(entry, Mapping):
    raise InvalidDescriptorError(f"{context}: expected a mapping, got {type(entry).__name__}.")
  return FieldDescriptor(
    name=str(_require(entry, "name", context)),
    type_name=str(_require(entry, "type", context)),
    tags=entry.get("tags") or {},
  )


def _build_type(entry: Any, index: int) -> TypeDescriptor:
  context = f"type #{index + 1}"
  if not isinstance(entry, Mapping):
    raise InvalidDescriptorError(f"{context}: expected a mapping, got {type(entry).__name__}.")
  name = str(_require(entry, "name", context))
  fields = [
    _build_field(f, name, i)
    for i, f in enumerate(entry.get("fields") or [])
  ]
  return TypeDescriptor(
    simple_name=name,
    namespace=str(entry.get("namespace") or ""),
    fields=tuple(fields),
    type_tags=entry.get("tags") or {},
  )


def parse_descriptors(source: Union[str, IO[str]]) -> Dict[str, TypeDescriptor]:
  """
  Parse a YAML document (text or stream) into {simple_name: TypeDescriptor},
  in document order.
  """
  data = yaml.safe_load(source) or {}
  if not isinstance(data, Mapping):
    raise InvalidDescriptorError("Descriptor document must be a mapping with a 'types' list.")

  descriptors: Dict[str, TypeDescriptor] = {}
  for i, entry in enumerate(data.get("types") or []):
    td = _build_type(entry, i)
    if td.simple_name in descriptors:
      raise InvalidDescriptorError(f"Duplicate type '{td.simple_name}' in descriptor document.")
    descriptors[td.simple_name] = td

  logger.debug("Parsed %d type descriptor(s)", len(descriptors))
  return descriptors


def load_descriptors(path: Union[str, Path]) -> Dict[str, TypeDescriptor]:
  """Load descriptors from a YAML file."""
  with open(path, "r", encoding="utf-8") as f:
    return parse_descriptors(f)


class MappingFieldReader:
  """Reads values from dict-like instances; a missing key becomes FieldReadError."""

  def read(self, instance: Any, field_name: str) -> Any:
    try:
      return instance[field_name]
    except (KeyError, TypeError) as exc:
      raise FieldReadError(field_name, f"no key '{field_name}'") from exc


class YamlDescriptorProvider:
  """IntrospectionProvider over descriptors loaded from a YAML document."""

  def __init__(self, descriptors: Mapping[str, TypeDescriptor]):
    self.descriptors = dict(descriptors)

  @classmethod
  def from_file(cls, path: Union[str, Path]) -> "YamlDescriptorProvider":
    return cls(load_descriptors(path))

  def describe(self, obj_or_type: Any) -> TypeDescriptor:
    """Look up by type name; accepts a name, a class or an instance."""
    if isinstance(obj_or_type, str):
      name = obj_or_type
    elif isinstance(obj_or_type, type):
      name = obj_or_type.__name__
    else:
      name = type(obj_or_type).__name__

    try:
      return self.descriptors[name]
    except KeyError as exc:
      available = ", ".join(self.descriptors) or "(none)"
      raise KeyError(f"No descriptor for type '{name}'. Available types: {available}.") from exc

  def field_reader(self) -> MappingFieldReader:
    return MappingFieldReader()
