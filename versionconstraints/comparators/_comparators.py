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
"""Version comparator registry."""

from .comparator_base import VersionComparator
from .default import DefaultVersionComparator
from .pep440 import Pep440Comparator
from .semver import SemverComparator

_comparators = {
    'default': DefaultVersionComparator(),
    'pep440': Pep440Comparator(),
    'semver': SemverComparator(),
}


def get(name: str) -> VersionComparator | None:
  """Get a comparator by name."""
  return _comparators.get(name.lower())


def names() -> list[str]:
  """Names of all registered comparators."""
  return sorted(_comparators)
