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
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from metagen.constants import (
  TagKind, TYPE_LEVEL, FIELD_LEVEL, PARAM_NAME, PARAM_PRIMARY_KEY, PARAM_NULLABLE,
)
from metagen.generation.validators import (
  InvalidParameterError, MissingRequiredParameterError,
)

"""
Metadata tag registry.

Each TagKind declares its parameters (name, value kind, required flag and
default). resolve_tag() turns the raw, possibly partial parameters attached
to a descriptor into a complete parameter map.
"""

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParameterSpec:
  name: str
  value_type: type
  required: bool = False
  default: Any = None


@dataclass(frozen=True)
class TagSpec:
  kind: TagKind
  level: str
  parameters: Tuple[ParameterSpec, ...] = ()

  def parameter(self, name: str) -> Optional[ParameterSpec]:
    for p in self.parameters:
      if p.name == name:
        return p
    return None


TAG_REGISTRY: Mapping[TagKind, TagSpec] = MappingProxyType({
  TagKind.BUILDER_TARGET: TagSpec(
    kind=TagKind.BUILDER_TARGET,
    level=TYPE_LEVEL,
  ),
  TagKind.TABLE: TagSpec(
    kind=TagKind.TABLE,
    level=TYPE_LEVEL,
    parameters=(
      ParameterSpec(PARAM_NAME, str, required=True),
    ),
  ),
  TagKind.COLUMN: TagSpec(
    kind=TagKind.COLUMN,
    level=FIELD_LEVEL,
    parameters=(
      ParameterSpec(PARAM_NAME, str, required=True),
      ParameterSpec(PARAM_PRIMARY_KEY, bool, default=False),
      ParameterSpec(PARAM_NULLABLE, bool, default=True),
    ),
  ),
})


def spec_for(kind: TagKind) -> TagSpec:
  return TAG_REGISTRY[TagKind(kind)]


def tag_level(kind: TagKind) -> str:
  """Return 'type' or 'field' for the given tag kind."""
  return spec_for(kind).level


def _check_value(spec: TagSpec, param: ParameterSpec, value: Any) -> Any:
  # bool is a subclass of int, so compare exact types for bool parameters
  if param.value_type is bool:
    if type(value) is not bool:
      raise InvalidParameterError(spec.kind, param.name, value)
    return value
  if not isinstance(value, param.value_type):
    raise InvalidParameterError(spec.kind, param.name, value)
  return value


def resolve_tag(
  kind: TagKind,
  raw: Optional[Mapping[str, Any]] = None,
  registry: Mapping[TagKind, TagSpec] = TAG_REGISTRY,
) -> Dict[str, Any]:
  """
  Return the complete parameter map for a tag with defaults applied.

  Raises:
      MissingRequiredParameterError: a required parameter is absent, None or blank.
      InvalidParameterError: a supplied value has the wrong kind.
  """
  spec = registry[TagKind(kind)]
  raw = raw or {}
  resolved: Dict[str, Any] = {}

  for param in spec.parameters:
    value = raw.get(param.name)
    # a blank name is as good as no name
    if param.required and isinstance(value, str) and not value.strip():
      value = None
    if value is None:
      if param.required:
        raise MissingRequiredParameterError(spec.kind, param.name)
      resolved[param.name] = param.default
      continue
    resolved[param.name] = _check_value(spec, param, value)

  unknown = sorted(k for k in raw if spec.parameter(k) is None)
  if unknown:
    logger.debug("Ignoring unknown %s parameters: %s", spec.kind.value, ", ".join(unknown))

  return resolved


class MetadataTagRegistry:
  """
  Object facade over resolve_tag(), for callers that prefer to inject the
  registry. Holds no mutable state.
  """

  def __init__(self, registry: Mapping[TagKind, TagSpec] = TAG_REGISTRY):
    self._registry = registry

  def spec(self, kind: TagKind) -> TagSpec:
    return self._registry[TagKind(kind)]

  def resolve(self, kind: TagKind, raw: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    return resolve_tag(kind, raw, registry=self._registry)
