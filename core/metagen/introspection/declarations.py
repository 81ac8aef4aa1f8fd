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

import dataclasses
import sys
import types
import typing
from typing import Any, Dict, Optional

from metagen.constants import (
  TagKind, INT64, STRING, BOOL, FLOAT64, PARAM_NAME, PARAM_PRIMARY_KEY, PARAM_NULLABLE,
)
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import FieldReadError, InvalidDescriptorError

"""
Ahead-of-time declarations for Python dataclasses.

  @table(name="people")
  @builder_target
  @dataclass
  class Person:
    name: str = column(name="name", nullable=False)
    age: int = column(name="age")
    nickname: str = ""          # not persisted

describe(Person) turns the declarations into a TypeDescriptor. Nothing is
registered globally; the tags live on the class itself.
"""

TAGS_ATTR = "__metagen_tags__"
COLUMN_METADATA_KEY = "metagen.column"

_PYTHON_TYPE_NAMES = {
  int: INT64,
  str: STRING,
  bool: BOOL,
  float: FLOAT64,
}
_PYTHON_TYPE_NAMES_BY_NAME = {t.__name__: name for t, name in _PYTHON_TYPE_NAMES.items()}


# -----------------------------------------------------------------------------
# Declarations
# -----------------------------------------------------------------------------
def _add_type_tag(cls, kind: TagKind, params: Dict[str, Any]):
  # Copy so subclasses never mutate the tags of their base class
  tags = dict(cls.__dict__.get(TAGS_ATTR, {}))
  tags[kind] = params
  setattr(cls, TAGS_ATTR, tags)
  return cls


def builder_target(cls):
  """Mark a class for builder generation."""
  return _add_type_tag(cls, TagKind.BUILDER_TARGET, {})


def table(name: Optional[str] = None):
  """Mark a class as persisted to the table `name`."""
  params = {PARAM_NAME: name} if name is not None else {}

  def decorator(cls):
    return _add_type_tag(cls, TagKind.TABLE, params)
  return decorator


def column(
  name: Optional[str] = None,
  *,
  primary_key: Optional[bool] = None,
  nullable: Optional[bool] = None,
  **field_kwargs,
):
  """
  dataclasses.field() carrying Column tag parameters in its metadata.
  Omitted parameters are left to the tag registry defaults.
  """
  params: Dict[str, Any] = {}
  if name is not None:
    params[PARAM_NAME] = name
  if primary_key is not None:
    params[PARAM_PRIMARY_KEY] = primary_key
  if nullable is not None:
    params[PARAM_NULLABLE] = nullable

  metadata = dict(field_kwargs.pop("metadata", None) or {})
  metadata[COLUMN_METADATA_KEY] = params

  if "default" not in field_kwargs and "default_factory" not in field_kwargs:
    field_kwargs["default"] = None
  return dataclasses.field(metadata=metadata, **field_kwargs)


# -----------------------------------------------------------------------------
# Introspection
# -----------------------------------------------------------------------------
def semantic_type_name(annotation: Any) -> str:
  """Map a Python annotation to a semantic type name."""
  origin = typing.get_origin(annotation)
  if origin in (typing.Union, types.UnionType):
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    if len(args) == 1:
      return semantic_type_name(args[0])

  if annotation in _PYTHON_TYPE_NAMES:
    return _PYTHON_TYPE_NAMES[annotation]
  if isinstance(annotation, str):
    return _PYTHON_TYPE_NAMES_BY_NAME.get(annotation.strip(), annotation)
  return getattr(annotation, "__name__", None) or str(annotation)


def _resolve_annotation(cls, field_name: str, annotation: Any) -> Any:
  """Evaluate one string annotation in the namespace of the class declaring it."""
  if not isinstance(annotation, str):
    return annotation
  owner = next(
    (c for c in cls.__mro__ if field_name in c.__dict__.get("__annotations__", {})),
    cls,
  )
  module = sys.modules.get(owner.__module__)
  globalns = dict(vars(module)) if module is not None else {}
  try:
    return eval(annotation, globalns, dict(vars(owner)))
  except (NameError, AttributeError, TypeError, SyntaxError):
    return annotation


def _resolved_hints(cls) -> Dict[str, Any]:
  try:
    return typing.get_type_hints(cls)
  except (NameError, TypeError):
    # One unresolvable annotation must not degrade the others
    return {
      f.name: _resolve_annotation(cls, f.name, f.type)
      for f in dataclasses.fields(cls)
    }


def describe(obj_or_type: Any, *, namespace: Optional[str] = None) -> TypeDescriptor:
  """
  Build a TypeDescriptor from a declared dataclass (or an instance of one).
  Fields keep their dataclass declaration order.
  """
  cls = obj_or_type if isinstance(obj_or_type, type) else type(obj_or_type)
  if not dataclasses.is_dataclass(cls):
    raise InvalidDescriptorError(
      f"{cls.__name__} is not a dataclass; declare it with @dataclass before describing it."
    )

  hints = _resolved_hints(cls)
  fields = []
  for f in dataclasses.fields(cls):
    tags = {}
    column_params = f.metadata.get(COLUMN_METADATA_KEY)
    if column_params is not None:
      tags[TagKind.COLUMN] = column_params
    fields.append(FieldDescriptor(
      name=f.name,
      type_name=semantic_type_name(hints.get(f.name, f.type)),
      tags=tags,
    ))

  return TypeDescriptor(
    simple_name=cls.__name__,
    namespace=cls.__module__ if namespace is None else namespace,
    fields=tuple(fields),
    type_tags=cls.__dict__.get(TAGS_ATTR, {}),
  )


class AttributeFieldReader:
  """Reads instance attributes; AttributeError becomes FieldReadError."""

  def read(self, instance: Any, field_name: str) -> Any:
    try:
      return getattr(instance, field_name)
    except AttributeError as exc:
      raise FieldReadError(field_name, str(exc)) from exc


class DeclarationProvider:
  """IntrospectionProvider over declared dataclasses."""

  def __init__(self, namespace: Optional[str] = None):
    self.namespace = namespace

  def describe(self, obj_or_type: Any) -> TypeDescriptor:
    return describe(obj_or_type, namespace=self.namespace)

  def field_reader(self) -> AttributeFieldReader:
    return AttributeFieldReader()
