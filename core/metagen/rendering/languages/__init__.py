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
from typing import Optional, Type

from metagen.config.profiles import Profile, load_profile
from metagen.constants import DEFAULT_BUILDER_LANGUAGE
from metagen.rendering.languages.base import BuilderLanguage
from metagen.rendering.languages.java import JavaBuilderLanguage
from metagen.rendering.languages.python import PythonBuilderLanguage
from utils.env import env_str

"""
Builder target languages.

Each language implements BuilderLanguage and knows how to render the
sections of a fluent builder for a TypeDescriptor.
"""

logger = logging.getLogger(__name__)

_LANGUAGE_REGISTRY: dict[str, Type[BuilderLanguage]] = {
  "java": JavaBuilderLanguage,
  "python": PythonBuilderLanguage,
}


def get_available_language_names() -> list[str]:
  return sorted(_LANGUAGE_REGISTRY)


def _resolve_language_name(
  explicit: Optional[str] = None,
  profile: Optional[Profile] = None,
) -> str:
  """
  Resolve a builder language name from (in order):

  1. explicit argument
  2. environment variable METAGEN_BUILDER_LANGUAGE
  3. profile.builder_language (given, or loaded from metagen_profiles.yaml)
  4. hard fallback 'java'
  """
  if explicit:
    return explicit.lower()

  env_name = env_str("METAGEN_BUILDER_LANGUAGE")
  if env_name:
    return env_name.lower()

  if profile is None:
    try:
      profile = load_profile()
    except (FileNotFoundError, KeyError, ValueError) as exc:
      logger.debug("No usable profile for builder language resolution: %s", exc)
      profile = None

  if profile is not None and profile.builder_language:
    return profile.builder_language.lower()

  return DEFAULT_BUILDER_LANGUAGE


def get_builder_language(
  name: Optional[str] = None,
  profile: Optional[Profile] = None,
) -> BuilderLanguage:
  """
  Return an instance of the resolved BuilderLanguage.

  Raises:
      ValueError: if the resolved name is not registered.
  """
  language_name = _resolve_language_name(name, profile)

  try:
    language_cls = _LANGUAGE_REGISTRY[language_name]
  except KeyError as exc:
    available = ", ".join(get_available_language_names())
    raise ValueError(
      f"Unknown builder language: {language_name!r}. "
      f"Available languages: {available}."
    ) from exc

  return language_cls()
