# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""SemVer version ordering."""

from __future__ import annotations

import re
from typing import Any

import semver

from .comparator_base import VersionComparator

_CORE_PATTERN = re.compile(r'^(\d+)(\.\d+)?(\.\d+)?(.*)$')


def _strip_leading_v(version: str) -> str:
  """Strip leading v from the version, if any."""
  # Versions starting with "v" aren't valid SemVer, but they are common enough
  # in published versions to accept.
  if version.startswith(('v', 'V')):
    return version[1:]

  return version


def _remove_leading_zero(component: str) -> str:
  if component.startswith('.'):
    return '.' + str(int(component[1:]))
  return str(int(component))


def coerce(version: str) -> str:
  """Coerce a partial or zero-padded version into SemVer form.

  e.g. '1' -> '1.0.0', '1.02' -> '1.2.0'. Anything else is left untouched.
  """
  match = _CORE_PATTERN.match(_strip_leading_v(version))
  if not match:
    return version

  major = match.group(1)
  minor = match.group(2) or '.0'
  patch = match.group(3) or '.0'
  suffix = match.group(4) or ''

  return (_remove_leading_zero(major) + _remove_leading_zero(minor) +
          _remove_leading_zero(patch) + suffix)


def is_valid(version: str) -> bool:
  """Returns whether or not the version is a valid (coerced) SemVer."""
  return semver.Version.is_valid(coerce(version))


def parse(version: str) -> semver.Version:
  """Parse a SemVer, raising ValueError if it is not one."""
  return semver.Version.parse(coerce(version))


class SemverComparator(VersionComparator):
  """SemVer 2.0 precedence."""

  def sort_key(self, version: str) -> Any:
    try:
      return (0, parse(version))
    except ValueError:
      # Unparsable versions sort after every SemVer, lexically among
      # themselves.
      return (1, version)
