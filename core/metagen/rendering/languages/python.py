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

import keyword

from metagen.constants import INT32, INT64, LONG, STRING, BOOL, FLOAT64
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import InvalidDescriptorError
from .base import BuilderLanguage

# Method names on the generated builder that fields must not shadow
_RESERVED_MEMBERS = {"build", "self"}


class PythonBuilderLanguage(BuilderLanguage):
  """
  Python builder source. Values are held in underscore attributes so the
  setter methods, which carry the plain field names, are never shadowed.
  """

  LANGUAGE_NAME = "python"

  TYPE_NAMES = {
    INT32: "int",
    INT64: "int",
    LONG: "int",
    STRING: "str",
    BOOL: "bool",
    FLOAT64: "float",
  }

  def validate(self, descriptor: TypeDescriptor) -> None:
    for f in descriptor.fields:
      if keyword.iskeyword(f.name) or f.name in _RESERVED_MEMBERS:
        raise InvalidDescriptorError(
          f"field name '{f.name}' of type '{descriptor.simple_name}' "
          "cannot be used as a Python builder method."
        )

  def render_namespace(self, namespace: str, descriptor: TypeDescriptor) -> str:
    return f"from {namespace} import {descriptor.simple_name}\n\n\n"

  def render_class_open(self, descriptor: TypeDescriptor) -> str:
    return (
      f"class {self.builder_name(descriptor)}:\n"
      f"{self.INDENT}\"\"\"Fluent builder for {descriptor.simple_name}.\"\"\"\n\n"
    )

  def render_fields(self, descriptor: TypeDescriptor) -> str:
    i1 = self.INDENT
    i2 = self.INDENT * 2
    lines = [f"{i1}def __init__(self) -> None:\n"]
    for f in descriptor.fields:
      lines.append(f"{i2}self._{f.name}: {self.source_type(f.type_name)} | None = None\n")
    if not descriptor.fields:
      lines.append(f"{i2}pass\n")
    return "".join(lines) + "\n"

  def render_setter(self, descriptor: TypeDescriptor, field: FieldDescriptor) -> str:
    i1 = self.INDENT
    i2 = self.INDENT * 2
    ptype = self.source_type(field.type_name)
    return (
      f"{i1}def {field.name}(self, {field.name}: {ptype}) -> \"{self.builder_name(descriptor)}\":\n"
      f"{i2}self._{field.name} = {field.name}\n"
      f"{i2}return self\n\n"
    )

  def render_build(self, descriptor: TypeDescriptor) -> str:
    args = ", ".join(f"self._{name}" for name in descriptor.field_names())
    return (
      f"{self.INDENT}def build(self) -> {descriptor.simple_name}:\n"
      f"{self.INDENT * 2}return {descriptor.simple_name}({args})\n"
    )
