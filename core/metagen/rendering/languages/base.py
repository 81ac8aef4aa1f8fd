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

from abc import ABC, abstractmethod
from typing import Mapping

from metagen.descriptors import FieldDescriptor, TypeDescriptor, normalize_namespace


class BuilderLanguage(ABC):
  """
  Base interface for builder target languages.
  Implementations render the individual sections of a fluent builder;
  render_builder() fixes their order.
  """

  LANGUAGE_NAME = "base"
  INDENT = "    "

  # Semantic type name -> source type name; unknown names are emitted verbatim.
  TYPE_NAMES: Mapping[str, str] = {}

  def source_type(self, type_name: str) -> str:
    return self.TYPE_NAMES.get(type_name, type_name)

  def builder_name(self, descriptor: TypeDescriptor) -> str:
    return f"{descriptor.simple_name}Builder"

  def validate(self, descriptor: TypeDescriptor) -> None:
    """Hook for language-specific naming restrictions."""

  # ---------------------------------------------------------------------------
  # Sections
  # ---------------------------------------------------------------------------
  @abstractmethod
  def render_namespace(self, namespace: str, descriptor: TypeDescriptor) -> str:
    """Render the namespace line for a non-empty, normalized namespace."""
    raise NotImplementedError

  @abstractmethod
  def render_class_open(self, descriptor: TypeDescriptor) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_fields(self, descriptor: TypeDescriptor) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_setter(self, descriptor: TypeDescriptor, field: FieldDescriptor) -> str:
    raise NotImplementedError

  @abstractmethod
  def render_build(self, descriptor: TypeDescriptor) -> str:
    raise NotImplementedError

  def render_class_close(self, descriptor: TypeDescriptor) -> str:
    return ""

  # ---------------------------------------------------------------------------
  # Assembly
  # ---------------------------------------------------------------------------
  def render_builder(self, descriptor: TypeDescriptor) -> str:
    self.validate(descriptor)

    parts: list[str] = []
    namespace = normalize_namespace(descriptor.namespace)
    if namespace:
      parts.append(self.render_namespace(namespace, descriptor))

    parts.append(self.render_class_open(descriptor))
    parts.append(self.render_fields(descriptor))
    for f in descriptor.fields:
      parts.append(self.render_setter(descriptor, f))
    parts.append(self.render_build(descriptor))
    parts.append(self.render_class_close(descriptor))

    return "".join(parts)
