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

import pytest

from metagen.constants import TagKind
from metagen.descriptors import FieldDescriptor, TypeDescriptor


@pytest.fixture(autouse=True)
def clear_metagen_env(monkeypatch):
  """Ensure profile/language env overrides never leak into tests."""
  for key in (
    "METAGEN_PROFILE",
    "METAGEN_PROFILES_PATH",
    "METAGEN_BUILDER_LANGUAGE",
    "METAGEN_STRICT_TYPES",
    "METAGEN_STRICT_READS",
    "METAGEN_TYPE_MAP",
  ):
    monkeypatch.delenv(key, raising=False)
  yield


# -------------------------------------------------------------------
# Descriptors
# -------------------------------------------------------------------
@pytest.fixture
def people_descriptor():
  """
  Person(name: string, age: int64) tagged Table(name="people");
  name is NOT NULL, age uses the Column defaults.
  """
  return TypeDescriptor(
    simple_name="Person",
    namespace="com.training.orm",
    fields=(
      FieldDescriptor("name", "string", {TagKind.COLUMN: {"name": "name", "nullable": False}}),
      FieldDescriptor("age", "int64", {TagKind.COLUMN: {"name": "age"}}),
    ),
    type_tags={TagKind.TABLE: {"name": "people"}},
  )


@pytest.fixture
def builder_descriptor():
  """Person(name, age, email) tagged BuilderTarget."""
  return TypeDescriptor(
    simple_name="Person",
    namespace="com.training.annotation.processing",
    fields=(
      FieldDescriptor("name", "string"),
      FieldDescriptor("age", "int32"),
      FieldDescriptor("email", "string"),
    ),
    type_tags={TagKind.BUILDER_TARGET: {}},
  )


@pytest.fixture
def users_descriptor():
  """
  The users table: id is the primary key, created_at is persisted,
  and `password` carries no Column tag.
  """
  return TypeDescriptor(
    simple_name="User",
    namespace="com/training/orm",
    fields=(
      FieldDescriptor("id", "long", {TagKind.COLUMN: {"name": "id", "primaryKey": True, "nullable": False}}),
      FieldDescriptor("username", "string", {TagKind.COLUMN: {"name": "username", "nullable": False}}),
      FieldDescriptor("password", "string"),
      FieldDescriptor("email", "string", {TagKind.COLUMN: {"name": "email"}}),
      FieldDescriptor("createdAt", "string", {TagKind.COLUMN: {"name": "created_at"}}),
    ),
    type_tags={TagKind.TABLE: {"name": "users"}, TagKind.BUILDER_TARGET: {}},
  )
