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
"""Default version ordering used by the dependency resolver."""
import collections
import functools
import re

from .comparator_base import VersionComparator

# A version is split in parts between '.', '-', '_' and '+', and at
# transitions between digits and non-digits. e.g. '1.0rc1' -> 1, 0, rc, 1.
_PART_PATTERN = re.compile(r'[0-9]+|[^0-9.\-_+]+')

# Qualifiers with a fixed precedence. Any qualifier not listed here sorts
# between 'dev' and 'rc', lexically among other unknown qualifiers.
_SPECIAL_QUALIFIERS = {
    'dev': 0,
    'rc': 2,
    'snapshot': 3,
    'final': 4,
    'ga': 5,
    'release': 6,
    'sp': 7,
}
_UNKNOWN_QUALIFIER = 1


class VersionPart(collections.namedtuple('VersionPart', 'number qualifier')):
  """A single version part. Exactly one of number/qualifier is set."""

  __slots__ = ()

  @property
  def is_numeric(self):
    return self.number is not None

  def __lt__(self, other):
    # Numeric parts sort after any qualifier.
    if self.is_numeric != other.is_numeric:
      return other.is_numeric

    if self.is_numeric:
      return self.number < other.number

    left_rank = _SPECIAL_QUALIFIERS.get(self.qualifier, _UNKNOWN_QUALIFIER)
    right_rank = _SPECIAL_QUALIFIERS.get(other.qualifier, _UNKNOWN_QUALIFIER)
    if left_rank != right_rank:
      return left_rank < right_rank

    return self.qualifier < other.qualifier


_ZERO = VersionPart(0, None)


@functools.total_ordering
class Version:
  """Parsed version.

  Missing trailing parts are treated as zero, so '1.0' == '1.0.0' and
  '2.0-rc' < '2.0'.
  """

  def __init__(self, raw, parts):
    self.raw = raw
    self.parts = parts

  def __str__(self):
    return self.raw

  def __repr__(self):
    return f'Version({self.raw!r})'

  def __eq__(self, other):
    if not isinstance(other, Version):
      return NotImplemented
    return self.parts == other.parts

  def __hash__(self):
    return hash(self.parts)

  def __lt__(self, other):
    if not isinstance(other, Version):
      return NotImplemented

    for i in range(max(len(self.parts), len(other.parts))):
      left = self.parts[i] if i < len(self.parts) else _ZERO
      right = other.parts[i] if i < len(other.parts) else _ZERO
      if left == right:
        continue

      return left < right

    return False

  @classmethod
  def from_string(cls, str_version):
    """Parse a version. Never fails."""
    parts = []
    for token in _PART_PATTERN.findall(str_version):
      if token.isascii() and token.isdigit():
        parts.append(VersionPart(int(token), None))
      else:
        parts.append(VersionPart(None, token.lower()))

    # Trailing zeros carry no ordering information.
    while parts and parts[-1] == _ZERO:
      parts.pop()

    return cls(str_version, tuple(parts))


class DefaultVersionComparator(VersionComparator):
  """The resolver's default version ordering."""

  def sort_key(self, version):
    return Version.from_string(version)
