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
"""Version constraints for dependency resolution."""

from .cache import Cache, InMemoryCache, ResolutionCache
from .codec import TruncatedRecord, decode, encode
from .constraint import (ConstraintMode, ModuleVersionSelector,
                         MutableVersionConstraint, UnsupportedMultipleRejects,
                         VersionConstraint)
from .scheme import VersionSelectorScheme, default_scheme
from .version_selector import (Candidate, ExactVersionSelector,
                               InvalidSelectorExpression,
                               InverseVersionSelector, LatestVersionSelector,
                               SelectorError, StatusRequired,
                               SubVersionSelector, VersionRangeSelector,
                               VersionSelector)
