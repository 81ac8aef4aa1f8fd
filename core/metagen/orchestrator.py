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

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from metagen.config.profiles import Profile
from metagen.constants import ArtifactKind
from metagen.descriptors import TypeDescriptor
from metagen.generation.types_map import TypeMapper
from metagen.generation.validators import GenerationError
from metagen.introspection.base import FieldReader
from metagen.rendering.builder import BuilderCodeGenerator
from metagen.rendering.ddl import SchemaDDLGenerator
from metagen.rendering.dml import InsertStatement, InsertStatementGenerator
from metagen.rendering.languages import get_builder_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
  """Value form of a generation call: text on success, error otherwise."""

  text: str = ""
  error: Optional[GenerationError] = None

  @property
  def ok(self) -> bool:
    return self.error is None


class GenerationOrchestrator:
  """
  Dispatches (descriptor, artifact kind) requests to the generators.
  Generator errors propagate unchanged.
  """

  def __init__(
    self,
    builder: Optional[BuilderCodeGenerator] = None,
    ddl: Optional[SchemaDDLGenerator] = None,
    insert: Optional[InsertStatementGenerator] = None,
  ):
    self.builder = builder or BuilderCodeGenerator()
    self.ddl = ddl or SchemaDDLGenerator()
    self.insert = insert or InsertStatementGenerator()

  @classmethod
  def from_profile(
    cls,
    profile: Profile,
    *,
    reader: Optional[FieldReader] = None,
    language: Optional[str] = None,
  ) -> "GenerationOrchestrator":
    """Build generators configured by a profile (language, strictness, type map)."""
    mapper = TypeMapper(strict=profile.strict_types, extra_mappings=profile.type_map)
    return cls(
      builder=BuilderCodeGenerator(get_builder_language(language, profile=profile)),
      ddl=SchemaDDLGenerator(mapper),
      insert=InsertStatementGenerator(reader, strict_reads=profile.strict_reads),
    )

  def generate(self, descriptor: TypeDescriptor, kind: Union[ArtifactKind, str]) -> str:
    kind = ArtifactKind(kind)
    logger.debug("Generating %s for %s", kind.value, descriptor.qualified_name)
    if kind is ArtifactKind.BUILDER:
      return self.builder.generate(descriptor)
    return self.ddl.generate(descriptor)

  def generate_insert(
    self,
    instance: Any,
    descriptor: TypeDescriptor,
    *,
    parameterized: bool = False,
  ) -> Union[str, InsertStatement]:
    logger.debug("Generating insert for %s", descriptor.qualified_name)
    if parameterized:
      return self.insert.generate_parameterized(instance, descriptor)
    return self.insert.generate(instance, descriptor)

  def try_generate(self, descriptor: TypeDescriptor, kind: Union[ArtifactKind, str]) -> GenerationResult:
    """Like generate(), but returns structural errors instead of raising them."""
    try:
      return GenerationResult(text=self.generate(descriptor, kind))
    except GenerationError as exc:
      return GenerationResult(error=exc)
