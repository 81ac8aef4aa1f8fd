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

from typing import Optional

from metagen.constants import TagKind
from metagen.descriptors import TypeDescriptor
from metagen.generation.validators import require_type_tag
from metagen.rendering.languages import get_builder_language
from metagen.rendering.languages.base import BuilderLanguage


class BuilderCodeGenerator:
  """
  Emits fluent-builder source text for a BuilderTarget-tagged type.

  Output sections, in order: namespace line (omitted for an empty
  namespace), builder declaration, one field per descriptor field, one
  chainable setter per field, and build() passing the values to the
  constructor in descriptor order.
  """

  def __init__(self, language: Optional[BuilderLanguage] = None):
    self.language = language or get_builder_language()

  def generate(self, descriptor: TypeDescriptor) -> str:
    require_type_tag(descriptor, TagKind.BUILDER_TARGET)
    return self.language.render_builder(descriptor)


def render_builder_source(descriptor: TypeDescriptor, language: Optional[str] = None) -> str:
  """Convenience: render with the named (or resolved) builder language."""
  return BuilderCodeGenerator(get_builder_language(language)).generate(descriptor)
