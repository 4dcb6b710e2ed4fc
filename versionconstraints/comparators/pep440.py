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
"""PEP 440 version ordering."""

import packaging.version

from .comparator_base import VersionComparator


class Pep440Comparator(VersionComparator):
  """PEP 440 version ordering."""

  def sort_key(self, version):
    """Sort key."""
    try:
      return (0, packaging.version.Version(version))
    except packaging.version.InvalidVersion:
      # packaging no longer has LegacyVersion, so invalid versions are ordered
      # after all valid ones instead.
      return (1, version)
