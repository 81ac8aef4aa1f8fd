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

from metagen.constants import TagKind, TYPE_LEVEL, FIELD_LEVEL
from metagen.generation.tags import (
  MetadataTagRegistry, ParameterSpec, TagSpec, resolve_tag, spec_for, tag_level,
)
from metagen.generation.validators import (
  InvalidParameterError, MissingRequiredParameterError,
)


# ---------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------

def test_column_defaults_applied():
  assert resolve_tag(TagKind.COLUMN, {"name": "age"}) == {
    "name": "age",
    "primaryKey": False,
    "nullable": True,
  }


def test_column_explicit_values_win():
  params = resolve_tag(TagKind.COLUMN, {"name": "id", "primaryKey": True, "nullable": False})
  assert params["primaryKey"] is True
  assert params["nullable"] is False


def test_builder_target_has_no_parameters():
  assert resolve_tag(TagKind.BUILDER_TARGET, None) == {}


def test_tag_levels():
  assert tag_level(TagKind.BUILDER_TARGET) == TYPE_LEVEL
  assert tag_level(TagKind.TABLE) == TYPE_LEVEL
  assert tag_level(TagKind.COLUMN) == FIELD_LEVEL
  assert spec_for("Column").parameter("nullable").default is True


# ---------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------

@pytest.mark.parametrize(
  "kind,raw",
  [
    (TagKind.TABLE, {}),
    (TagKind.TABLE, {"name": None}),
    (TagKind.TABLE, {"name": ""}),
    (TagKind.COLUMN, {"name": "   "}),
    (TagKind.COLUMN, {"nullable": False}),
  ],
)
def test_missing_required_name(kind, raw):
  with pytest.raises(MissingRequiredParameterError) as exc_info:
    resolve_tag(kind, raw)

  assert exc_info.value.tag_kind is kind
  assert exc_info.value.parameter_name == "name"
  assert f"{kind.value} tag requires parameter 'name'" in str(exc_info.value)


@pytest.mark.parametrize(
  "raw,param",
  [
    ({"name": "id", "primaryKey": "yes"}, "primaryKey"),
    ({"name": "id", "nullable": 0}, "nullable"),
    ({"name": 42}, "name"),
  ],
)
def test_wrong_value_kind_rejected(raw, param):
  with pytest.raises(InvalidParameterError) as exc_info:
    resolve_tag(TagKind.COLUMN, raw)
  assert exc_info.value.parameter_name == param


def test_unknown_parameters_dropped_and_logged(caplog):
  with caplog.at_level(logging.DEBUG, logger="metagen.generation.tags"):
    params = resolve_tag(TagKind.TABLE, {"name": "people", "schema": "dbo"})

  assert params == {"name": "people"}
  assert "schema" in caplog.text


def test_resolution_does_not_mutate_input():
  raw = {"name": "age"}
  resolve_tag(TagKind.COLUMN, raw)
  assert raw == {"name": "age"}


# ---------------------------------------------------------------------
# Registry object
# ---------------------------------------------------------------------

def test_registry_facade_uses_default_specs():
  registry = MetadataTagRegistry()
  assert registry.resolve(TagKind.COLUMN, {"name": "x"})["nullable"] is True
  assert registry.spec(TagKind.TABLE).level == TYPE_LEVEL


def test_registry_with_custom_specs():
  custom = {
    TagKind.TABLE: TagSpec(
      kind=TagKind.TABLE,
      level=TYPE_LEVEL,
      parameters=(ParameterSpec("name", str, default="unnamed"),),
    ),
  }
  registry = MetadataTagRegistry(custom)
  assert registry.resolve(TagKind.TABLE, {}) == {"name": "unnamed"}
