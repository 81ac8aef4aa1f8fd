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

from metagen.constants import INT32, INT64, LONG, STRING, BOOL, FLOAT64
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import InvalidDescriptorError
from .base import BuilderLanguage

# Reserved words and literals that cannot be used as Java identifiers
JAVA_RESERVED_WORDS = frozenset({
  "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
  "class", "const", "continue", "default", "do", "double", "else", "enum",
  "extends", "final", "finally", "float", "for", "goto", "if", "implements",
  "import", "instanceof", "int", "interface", "long", "native", "new",
  "package", "private", "protected", "public", "return", "short", "static",
  "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
  "transient", "try", "void", "volatile", "while", "true", "false", "null",
  "_",
})


class JavaBuilderLanguage(BuilderLanguage):
  """
  Java builder source:

    package com.training;

    public class PersonBuilder {
        private String name;
        ...
        public PersonBuilder name(String name) { ... return this; }
        public Person build() { return new Person(name, ...); }
    }
  """

  LANGUAGE_NAME = "java"

  TYPE_NAMES = {
    INT32: "int",
    INT64: "long",
    LONG: "long",
    STRING: "String",
    BOOL: "boolean",
    FLOAT64: "double",
  }

  def validate(self, descriptor: TypeDescriptor) -> None:
    if descriptor.simple_name in JAVA_RESERVED_WORDS:
      raise InvalidDescriptorError(
        f"type name '{descriptor.simple_name}' is a reserved word in Java."
      )
    for f in descriptor.fields:
      if f.name in JAVA_RESERVED_WORDS:
        raise InvalidDescriptorError(
          f"field name '{f.name}' of type '{descriptor.simple_name}' "
          "is a reserved word in Java."
        )

  def render_namespace(self, namespace: str, descriptor: TypeDescriptor) -> str:
    return f"package {namespace};\n\n"

  def render_class_open(self, descriptor: TypeDescriptor) -> str:
    return f"public class {self.builder_name(descriptor)} {{\n"

  def render_fields(self, descriptor: TypeDescriptor) -> str:
    lines = [
      f"{self.INDENT}private {self.source_type(f.type_name)} {f.name};\n"
      for f in descriptor.fields
    ]
    return "".join(lines) + "\n"

  def render_setter(self, descriptor: TypeDescriptor, field: FieldDescriptor) -> str:
    i1 = self.INDENT
    i2 = self.INDENT * 2
    jtype = self.source_type(field.type_name)
    return (
      f"{i1}public {self.builder_name(descriptor)} {field.name}({jtype} {field.name}) {{\n"
      f"{i2}this.{field.name} = {field.name};\n"
      f"{i2}return this;\n"
      f"{i1}}}\n\n"
    )

  def render_build(self, descriptor: TypeDescriptor) -> str:
    args = ", ".join(descriptor.field_names())
    return (
      f"{self.INDENT}public {descriptor.simple_name} build() {{\n"
      f"{self.INDENT * 2}return new {descriptor.simple_name}({args});\n"
      f"{self.INDENT}}}\n"
    )

  def render_class_close(self, descriptor: TypeDescriptor) -> str:
    return "}\n"
