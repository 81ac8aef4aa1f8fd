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

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from metagen.constants import DEFAULT_BUILDER_LANGUAGE
from utils.env import env_bool, env_json, env_str

"""
Profile loading for metagen.

Profiles define environment-specific generation settings:
- the default builder target language
- strict type mapping (fail on unmapped semantic types)
- strict field reads (fail instead of rendering NULL)
- extra semantic type -> schema type mappings

They do NOT define type descriptors; those come from the introspection
providers.
"""

PROFILES_FILENAME = "metagen_profiles.yaml"


@dataclass
class Profile:
  name: str

  # Builder language used unless overridden explicitly or via env
  builder_language: str = DEFAULT_BUILDER_LANGUAGE

  # Raise UnmappedTypeError instead of falling back to VARCHAR(255)
  strict_types: bool = False

  # Raise FieldReadError instead of rendering NULL for unreadable fields
  strict_reads: bool = False

  # e.g. {"bool": "BOOLEAN", "float64": "DOUBLE PRECISION"}
  type_map: Dict[str, str] = field(default_factory=dict)


DEFAULT_PROFILE = Profile(name="dev")


def _find_profiles_path(explicit_path: str | None = None) -> Path:
  """
  Locate metagen_profiles.yaml in several common locations:

  1. explicit_path argument (if provided and exists)
  2. METAGEN_PROFILES_PATH env var (if set and exists)
  3. common fallback locations relative to the package and CWD

  Raises:
      FileNotFoundError: if no suitable file can be found.
  """
  candidates: list[Path] = []

  if explicit_path:
    candidates.append(Path(explicit_path))

  env_path = env_str("METAGEN_PROFILES_PATH")
  if env_path:
    candidates.append(Path(env_path))

  here = Path(__file__).resolve()
  candidates += [
    here.parents[3] / "config" / PROFILES_FILENAME,
    Path.cwd() / "config" / PROFILES_FILENAME,
    Path("/etc/metagen") / PROFILES_FILENAME,
  ]

  for c in candidates:
    if c and c.exists():
      return c

  searched = ", ".join(str(c) for c in candidates)
  raise FileNotFoundError(
    f"{PROFILES_FILENAME} not found in expected locations ({searched}). "
    "Provide an explicit path or configure METAGEN_PROFILES_PATH."
  )


def _as_bool(value, key: str, profile_name: str) -> bool:
  if isinstance(value, bool):
    return value
  raise ValueError(
    f"Profile '{profile_name}': '{key}' must be true or false, got {value!r}."
  )


def _merge_env_type_map(type_map: Dict) -> Dict[str, str]:
  merged = {str(k): str(v) for k, v in type_map.items()}
  env_map = env_json("METAGEN_TYPE_MAP", {})
  if isinstance(env_map, dict):
    merged.update({str(k): str(v) for k, v in env_map.items()})
  return merged


def load_profile(profiles_path: Optional[str] = None) -> Profile:
  """
  Load and return the current active profile.

  Resolution order for the profile name:
    - METAGEN_PROFILE env var
    - `active_profile` key in metagen_profiles.yaml
    - default 'dev'

  METAGEN_STRICT_TYPES / METAGEN_STRICT_READS override the profile flags;
  METAGEN_TYPE_MAP (a JSON object) is merged over the profile type_map.
  """
  path = _find_profiles_path(profiles_path)

  with open(path, "r") as f:
    data = yaml.safe_load(f) or {}

  active = env_str("METAGEN_PROFILE", data.get("active_profile", "dev"))
  profiles = data.get("profiles") or {}

  if active not in profiles:
    available = ", ".join(sorted(profiles)) if profiles else "(none)"
    raise KeyError(
      f"Active profile '{active}' not found in {PROFILES_FILENAME} "
      f"at {path}. Available profiles: {available}."
    )

  p = profiles[active] or {}

  strict_types = _as_bool(p.get("strict_types", False), "strict_types", active)
  strict_reads = _as_bool(p.get("strict_reads", False), "strict_reads", active)

  type_map = p.get("type_map", {}) or {}
  if not isinstance(type_map, dict):
    raise ValueError(f"Profile '{active}': 'type_map' must be a mapping.")

  return Profile(
    name=active,
    builder_language=(p.get("builder_language") or DEFAULT_BUILDER_LANGUAGE).lower(),
    strict_types=env_bool("METAGEN_STRICT_TYPES", strict_types),
    strict_reads=env_bool("METAGEN_STRICT_READS", strict_reads),
    type_map=_merge_env_type_map(type_map),
  )


def load_profile_or_default(profiles_path: Optional[str] = None) -> Profile:
  """Like load_profile(), but fall back to DEFAULT_PROFILE when no file exists."""
  try:
    return load_profile(profiles_path)
  except FileNotFoundError:
    return Profile(
      name=DEFAULT_PROFILE.name,
      strict_types=env_bool("METAGEN_STRICT_TYPES", False),
      strict_reads=env_bool("METAGEN_STRICT_READS", False),
      type_map=_merge_env_type_map({}),
    )
