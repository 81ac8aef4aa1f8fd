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

import logging

import pytest

from metagen.constants import TagKind
from metagen.descriptors import FieldDescriptor, TypeDescriptor
from metagen.generation.validators import (
  FieldReadError, MissingRequiredParameterError, NotTaggedError,
)
from metagen.rendering.dml import (
  InsertStatement, InsertStatementGenerator, render_value_literal,
)


class UserRecord:
  def __init__(self, id=None, username=None, password=None, email=None, created_at=None):
    self.id = id
    self.username = username
    self.password = password
    self.email = email
    self.createdAt = created_at


class FailingReader:
  """Reader that cannot access the listed fields."""

  def __init__(self, *blocked):
    self.blocked = set(blocked)

  def read(self, instance, field_name):
    if field_name in self.blocked:
      raise FieldReadError(field_name, "inaccessible")
    return getattr(instance, field_name)


@pytest.fixture
def user():
  return UserRecord(1, "john_doe", "secret", "john@example.com", "2025-01-02T10:30:00")


# ---------------------------------------------------------------------
# Literal form
# ---------------------------------------------------------------------

def test_insert_literal_statement(users_descriptor, user):
  sql = InsertStatementGenerator().generate(user, users_descriptor)
  assert sql == (
    "INSERT INTO users (id, username, email, created_at) "
    "VALUES (1, 'john_doe', 'john@example.com', '2025-01-02T10:30:00')"
  )
  assert "secret" not in sql


def test_unreadable_field_renders_null(users_descriptor, user):
  gen = InsertStatementGenerator(FailingReader("email"))
  assert gen.generate(user, users_descriptor) == (
    "INSERT INTO users (id, username, email, created_at) "
    "VALUES (1, 'john_doe', NULL, '2025-01-02T10:30:00')"
  )


def test_missing_attribute_renders_null(users_descriptor):
  class Partial:
    id = 7
    username = "ann"

  sql = InsertStatementGenerator().generate(Partial(), users_descriptor)
  assert sql.endswith("VALUES (7, 'ann', NULL, NULL)")


def test_all_fields_unreadable(users_descriptor, user):
  gen = InsertStatementGenerator(FailingReader("id", "username", "email", "createdAt"))
  assert gen.generate(user, users_descriptor).endswith("VALUES (NULL, NULL, NULL, NULL)")


def test_strict_reads_propagate_failure(users_descriptor, user):
  gen = InsertStatementGenerator(FailingReader("email"), strict_reads=True)
  with pytest.raises(FieldReadError) as exc_info:
    gen.generate(user, users_descriptor)
  assert exc_info.value.field_name == "email"


def test_insert_reflects_current_values(users_descriptor, user):
  gen = InsertStatementGenerator()
  before = gen.generate(user, users_descriptor)
  user.email = "new@example.com"
  after = gen.generate(user, users_descriptor)

  assert "'john@example.com'" in before
  assert "'new@example.com'" in after


def test_insert_requires_table_tag(builder_descriptor, user):
  with pytest.raises(NotTaggedError) as exc_info:
    InsertStatementGenerator().generate(user, builder_descriptor)
  assert exc_info.value.expected is TagKind.TABLE


def test_missing_column_name_raises_before_reading():
  td = TypeDescriptor(
    "Person",
    fields=(FieldDescriptor("name", "string", {TagKind.COLUMN: {}}),),
    type_tags={TagKind.TABLE: {"name": "people"}},
  )

  class Exploding:
    def read(self, instance, field_name):
      raise AssertionError("values must not be read for a broken descriptor")

  with pytest.raises(MissingRequiredParameterError):
    InsertStatementGenerator(Exploding()).generate(object(), td)


def test_table_without_columns():
  td = TypeDescriptor("Audit", type_tags={TagKind.TABLE: {"name": "audit"}})
  assert InsertStatementGenerator().generate(object(), td) == "INSERT INTO audit () VALUES ()"


@pytest.mark.parametrize(
  "value,expected",
  [
    ("abc", "'abc'"),
    ("", "''"),
    (42, "42"),
    (3.5, "3.5"),
    (None, "NULL"),
    (True, "TRUE"),
    (False, "FALSE"),
  ],
)
def test_render_value_literal(value, expected):
  assert render_value_literal(value) == expected


def test_embedded_quote_is_not_escaped_but_logged(caplog):
  with caplog.at_level(logging.WARNING, logger="metagen.rendering.dml"):
    literal = render_value_literal("O'Brien", "username")

  assert literal == "'O'Brien'"
  assert "username" in caplog.text


# ---------------------------------------------------------------------
# Parameterized form
# ---------------------------------------------------------------------

def test_parameterized_insert(users_descriptor, user):
  stmt = InsertStatementGenerator().generate_parameterized(user, users_descriptor)

  assert isinstance(stmt, InsertStatement)
  assert stmt.sql == (
    "INSERT INTO users (id, username, email, created_at) "
    "VALUES (:id, :username, :email, :createdAt)"
  )
  assert list(stmt.params) == ["id", "username", "email", "createdAt"]
  assert stmt.params["username"] == "john_doe"
  assert stmt.columns == ("id", "username", "email", "created_at")


def test_parameterized_insert_keeps_quotes_as_data(users_descriptor):
  stmt = InsertStatementGenerator().generate_parameterized(
    UserRecord(2, "O'Brien"), users_descriptor,
  )
  assert "O'Brien" not in stmt.sql
  assert stmt.params["username"] == "O'Brien"


def test_parameterized_insert_unreadable_field_is_null_literal(users_descriptor, user):
  stmt = InsertStatementGenerator(FailingReader("email")).generate_parameterized(user, users_descriptor)
  assert stmt.sql.endswith("VALUES (:id, :username, NULL, :createdAt)")
  assert "email" not in stmt.params
