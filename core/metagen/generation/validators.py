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

import re
from typing import Any, TYPE_CHECKING

from metagen.constants import TagKind

if TYPE_CHECKING:
  # Only for static analysis; descriptors import this module at runtime
  from metagen.descriptors import TypeDescriptor


# -----------------------------------------------------------------------------
# Error taxonomy
# -----------------------------------------------------------------------------
class GenerationError(Exception):
  """Base class for structural errors that abort a generation call."""


class NotTaggedError(GenerationError):
  """The descriptor lacks the type-level tag a generator requires."""

  def __init__(self, expected: TagKind, type_name: str | None = None):
    self.expected = TagKind(expected)
    self.type_name = type_name
    where = f" '{type_name}'" if type_name else ""
    super().__init__(
      f"Type{where} must carry the {self.expected.value} tag."
    )


class MissingRequiredParameterError(GenerationError):
  """A required tag parameter (e.g. Table.name, Column.name) is absent."""

  def __init__(self, tag_kind: TagKind, parameter_name: str):
    self.tag_kind = TagKind(tag_kind)
    self.parameter_name = parameter_name
    super().__init__(
      f"{self.tag_kind.value} tag requires parameter '{parameter_name}'."
    )


class InvalidParameterError(GenerationError):
  """A tag parameter was supplied with a value of the wrong kind."""

  def __init__(self, tag_kind: TagKind, parameter_name: str, value: Any):
    self.tag_kind = TagKind(tag_kind)
    self.parameter_name = parameter_name
    self.value = value
    super().__init__(
      f"{self.tag_kind.value}.{parameter_name}: invalid value {value!r} "
      f"({type(value).__name__})."
    )


class UnmappedTypeError(GenerationError):
  """Strict type mapping found no rule for a semantic type name."""

  def __init__(self, type_name: str):
    self.type_name = type_name
    super().__init__(f"No schema type registered for semantic type '{type_name}'.")


class FieldReadError(GenerationError):
  """
  A single field value could not be read from a live instance.
  Insert generation recovers from it locally unless reads are strict.
  """

  def __init__(self, field_name: str, reason: str | None = None):
    self.field_name = field_name
    self.reason = reason
    msg = f"Field '{field_name}' could not be read"
    super().__init__(f"{msg}: {reason}" if reason else f"{msg}.")


class InvalidDescriptorError(ValueError):
  """A descriptor violates its construction invariants."""


# -----------------------------------------------------------------------------
# Gating helpers
# -----------------------------------------------------------------------------
IDENTIFIER_REGEX = r"^[A-Za-z_][A-Za-z0-9_]*$"
IDENTIFIER_VALIDATOR = re.compile(IDENTIFIER_REGEX)


def require_type_tag(descriptor: "TypeDescriptor", kind: TagKind) -> None:
  """Raise NotTaggedError unless the descriptor carries the type-level tag."""
  if not descriptor.has_type_tag(kind):
    raise NotTaggedError(kind, descriptor.simple_name)


def validate_identifier(name: str, context: str = "name") -> None:
  """Validate a name that ends up as an identifier in generated source."""
  if not IDENTIFIER_VALIDATOR.match(name or ""):
    raise InvalidDescriptorError(
      f"{context}: '{name}' is not a valid identifier. "
      "Rules: letters / digits / underscore, must not start with a digit."
    )
