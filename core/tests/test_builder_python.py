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

from dataclasses import dataclass

import pytest

from metagen.constants import TagKind
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import InvalidDescriptorError
from metagen.rendering.builder import BuilderCodeGenerator
from metagen.rendering.languages.python import PythonBuilderLanguage


@dataclass
class Person:
  name: str
  age: int
  email: str


@pytest.fixture
def python_generator():
  return BuilderCodeGenerator(PythonBuilderLanguage())


@pytest.fixture
def local_person_descriptor():
  """Person(name, age, email) with no namespace, so the builder uses the injected class."""
  return TypeDescriptor(
    simple_name="Person",
    fields=(
      FieldDescriptor("name", "string"),
      FieldDescriptor("age", "int64"),
      FieldDescriptor("email", "string"),
    ),
    type_tags={TagKind.BUILDER_TARGET: {}},
  )


def _load_builder(code: str, builder_name: str = "PersonBuilder"):
  namespace = {"Person": Person}
  exec(compile(code, "<generated>", "exec"), namespace)
  return namespace[builder_name]


def test_python_builder_shape(python_generator, builder_descriptor):
  code = python_generator.generate(builder_descriptor)
  lines = code.splitlines()

  assert lines[0] == "from com.training.annotation.processing import Person"
  assert "class PersonBuilder:" in lines
  assert "        self._age: int | None = None" in lines
  assert '    def email(self, email: str) -> "PersonBuilder":' in lines
  assert "        return Person(self._name, self._age, self._email)" in lines


def test_generated_python_builder_chains_in_any_order(python_generator, local_person_descriptor):
  PersonBuilder = _load_builder(python_generator.generate(local_person_descriptor))

  person = PersonBuilder().email("john@example.com").age(30).name("John Doe").build()
  assert person == Person("John Doe", 30, "john@example.com")


def test_generated_python_builder_last_call_wins(python_generator, local_person_descriptor):
  PersonBuilder = _load_builder(python_generator.generate(local_person_descriptor))

  person = (
    PersonBuilder()
    .name("Bob Johnson")
    .age(35)
    .email("bob@example.com")
    .name("Robert Johnson")
    .build()
  )
  assert person.name == "Robert Johnson"


def test_generated_python_builder_partial_and_reused(python_generator, local_person_descriptor):
  PersonBuilder = _load_builder(python_generator.generate(local_person_descriptor))

  builder = PersonBuilder()
  partial = builder.name("Jane Smith").age(25).build()
  assert partial == Person("Jane Smith", 25, None)

  second = builder.name("Charlie Wilson").age(42).email("charlie@example.com").build()
  assert second == Person("Charlie Wilson", 42, "charlie@example.com")
  assert partial.name == "Jane Smith"


def test_python_builder_without_fields(python_generator):
  td = TypeDescriptor("Marker", type_tags={TagKind.BUILDER_TARGET: {}})
  code = python_generator.generate(td)

  namespace = {"Marker": type("Marker", (), {})}
  exec(compile(code, "<generated>", "exec"), namespace)
  assert isinstance(namespace["MarkerBuilder"]().build(), namespace["Marker"])


@pytest.mark.parametrize("field_name", ["build", "self", "class", "lambda"])
def test_python_builder_rejects_unusable_field_names(python_generator, field_name):
  td = TypeDescriptor(
    "Widget",
    fields=(FieldDescriptor(field_name, "string"),),
    type_tags={TagKind.BUILDER_TARGET: {}},
  )
  with pytest.raises(InvalidDescriptorError, match="cannot be used as a Python builder method"):
    python_generator.generate(td)
