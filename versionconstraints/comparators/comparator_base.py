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
"""Version comparator base classes."""
from abc import ABC, abstractmethod
from typing import Any, Iterable

LESS = -1
EQUAL = 0
GREATER = 1


class VersionComparator(ABC):
  """Total ordering over version strings."""

  @property
  def name(self) -> str:
    """Get the name of the comparator."""
    return self.__class__.__name__

  @abstractmethod
  def sort_key(self, version: str) -> Any:
    """Comparable key for a version.

    Must not raise for malformed versions. Two versions compare equal if and
    only if their keys are equal.
    """

  def compare(self, a: str, b: str) -> int:
    """Compare two versions, returning LESS, EQUAL or GREATER."""
    key_a = self.sort_key(a)
    key_b = self.sort_key(b)
    if key_a < key_b:
      return LESS
    if key_b < key_a:
      return GREATER
    return EQUAL

  def sort_versions(self, versions: list[str]) -> None:
    """Sort versions."""
    versions.sort(key=self.sort_key)

  def max_version(self, versions: Iterable[str]) -> str | None:
    """Return the highest version, or None if there are none."""
    return max(versions, key=self.sort_key, default=None)
