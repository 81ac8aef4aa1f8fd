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

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from metagen.constants import TagKind, FIELD_LEVEL, TYPE_LEVEL
from metagen.generation.tags import tag_level
from metagen.generation.validators import InvalidDescriptorError, validate_identifier

"""
Type descriptor model.

Descriptors are immutable snapshots of a type's shape. They are built once
per generation request by an introspection provider and only ever read by
the generators.
"""

ParameterValue = Union[str, bool]
ParameterMap = Mapping[str, ParameterValue]
TagMap = Mapping[TagKind, ParameterMap]


def _freeze_tags(tags: Optional[Mapping[Any, Optional[Mapping[str, Any]]]], level: str, owner: str) -> TagMap:
  """
  Normalize a raw tag mapping into a read-only {TagKind: ParameterMap}.
  Tag keys may be TagKind members or their string values.
  """
  frozen: dict[TagKind, ParameterMap] = {}
  for raw_kind, params in (tags or {}).items():
    try:
      kind = TagKind(raw_kind)
    except ValueError as exc:
      available = ", ".join(k.value for k in TagKind)
      raise InvalidDescriptorError(
        f"{owner}: unknown tag {raw_kind!r}. Available tags: {available}."
      ) from exc

    if tag_level(kind) != level:
      raise InvalidDescriptorError(
        f"{owner}: {kind.value} is a {tag_level(kind)}-level tag "
        f"and cannot be attached at {level} level."
      )
    frozen[kind] = MappingProxyType(dict(params or {}))
  return MappingProxyType(frozen)


@dataclass(frozen=True)
class FieldDescriptor:
  """One structural field of a type."""

  name: str
  type_name: str
  tags: TagMap = field(default_factory=dict)

  def __post_init__(self):
    validate_identifier(self.name, context="field name")
    if not self.type_name:
      raise InvalidDescriptorError(f"field '{self.name}': type_name must not be empty.")
    object.__setattr__(
      self, "tags", _freeze_tags(self.tags, FIELD_LEVEL, f"field '{self.name}'")
    )

  def __hash__(self):
    # tag maps are unhashable proxies, so only their kinds take part
    return hash((self.name, self.type_name, frozenset(self.tags)))

  def has_tag(self, kind: TagKind) -> bool:
    return TagKind(kind) in self.tags

  def tag(self, kind: TagKind) -> Optional[ParameterMap]:
    return self.tags.get(TagKind(kind))


@dataclass(frozen=True)
class TypeDescriptor:
  """
  One generatable type: name, namespace, ordered fields and type-level tags.

  Field order is declaration order. It drives constructor-argument order in
  builders and column order in DDL/DML.
  """

  simple_name: str
  namespace: str = ""
  fields: Tuple[FieldDescriptor, ...] = ()
  type_tags: TagMap = field(default_factory=dict)

  def __post_init__(self):
    validate_identifier(self.simple_name, context="type name")
    object.__setattr__(self, "namespace", self.namespace or "")

    fields = tuple(self.fields)
    seen: set[str] = set()
    for f in fields:
      if not isinstance(f, FieldDescriptor):
        raise InvalidDescriptorError(
          f"type '{self.simple_name}': expected FieldDescriptor, got {type(f).__name__}."
        )
      if f.name in seen:
        raise InvalidDescriptorError(
          f"type '{self.simple_name}': duplicate field name '{f.name}'."
        )
      seen.add(f.name)

    object.__setattr__(self, "fields", fields)
    object.__setattr__(
      self, "type_tags", _freeze_tags(self.type_tags, TYPE_LEVEL, f"type '{self.simple_name}'")
    )

  def __hash__(self):
    return hash((self.simple_name, self.namespace, self.fields, frozenset(self.type_tags)))

  # ---------------------------------------------------------------------------
  # Tag access
  # ---------------------------------------------------------------------------
  def has_type_tag(self, kind: TagKind) -> bool:
    return TagKind(kind) in self.type_tags

  def type_tag(self, kind: TagKind) -> Optional[ParameterMap]:
    return self.type_tags.get(TagKind(kind))

  # ---------------------------------------------------------------------------
  # Field access
  # ---------------------------------------------------------------------------
  @property
  def qualified_name(self) -> str:
    """Namespace-qualified name with '/' separators normalized to '.'."""
    ns = normalize_namespace(self.namespace)
    return f"{ns}.{self.simple_name}" if ns else self.simple_name

  def field_names(self) -> list[str]:
    return [f.name for f in self.fields]

  def get_field(self, name: str) -> Optional[FieldDescriptor]:
    for f in self.fields:
      if f.name == name:
        return f
    return None

  def tagged_fields(self, kind: TagKind) -> list[FieldDescriptor]:
    """Fields carrying the given field-level tag, in descriptor order."""
    return [f for f in self.fields if f.has_tag(kind)]


def normalize_namespace(namespace: str) -> str:
  """'com/training/orm' -> 'com.training.orm'; surrounding separators dropped."""
  parts = [p for p in (namespace or "").replace("/", ".").split(".") if p]
  return ".".join(parts)


def build_type_descriptor(
  simple_name: str,
  *,
  namespace: str = "",
  fields: Iterable[FieldDescriptor] = (),
  type_tags: Optional[Mapping[Any, Optional[Mapping[str, Any]]]] = None,
) -> TypeDescriptor:
  """Convenience constructor used by the introspection providers."""
  return TypeDescriptor(
    simple_name=simple_name,
    namespace=namespace,
    fields=tuple(fields),
    type_tags=type_tags or {},
  )
