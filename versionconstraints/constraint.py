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
"""Version constraints of dependency declarations.

A constraint holds version expressions as text: the preferred version and the
rejected versions. Selectors are only built from the text on demand, through
a `VersionSelectorScheme`.

Constraints are immutable. `prefer`, `strictly` and `reject` return new
constraints; `MutableVersionConstraint` is the slot holding the current value
while a declaration is being configured.
"""
from __future__ import annotations

import enum
from typing import Iterable, Optional

from attr import attrib, attrs

from . import scheme as scheme_module
from .scheme import VersionSelectorScheme
from .version_selector import VersionSelector

_INVERSE_TEMPLATE = '!({})'


class UnsupportedMultipleRejects(NotImplementedError):
  """More than one rejected version expression was used as a selector."""


class ConstraintMode(enum.IntEnum):
  """How the constraint's expressions were set."""
  # No preferred version and no rejects.
  UNCONSTRAINED = 0
  # A preferred version and no rejects.
  PREFERRED = 1
  # The rejects are the complement of the preferred version.
  STRICT = 2
  # Explicitly rejected versions.
  PREFERRED_WITH_REJECTS = 3


def _infer_mode(preferred: Optional[str],
                rejected: tuple[str, ...]) -> ConstraintMode:
  """Mode of a constraint built from its text alone."""
  if not rejected:
    return ConstraintMode.PREFERRED if preferred else ConstraintMode.UNCONSTRAINED

  if rejected == (_INVERSE_TEMPLATE.format(preferred or ''),):
    return ConstraintMode.STRICT

  return ConstraintMode.PREFERRED_WITH_REJECTS


def _to_tuple(rejects: Iterable[str]) -> tuple[str, ...]:
  return tuple(rejects)


@attrs(frozen=True, slots=True, repr=False)
class VersionConstraint:
  """A preferred version expression and rejected version expressions.

  Equality only considers the expressions, not the mode.
  """
  preferred: Optional[str] = attrib(default='')
  rejected: tuple[str, ...] = attrib(default=(), converter=_to_tuple)
  mode: ConstraintMode = attrib(default=None, eq=False)

  def __attrs_post_init__(self):
    if self.mode is None:
      object.__setattr__(self, 'mode', _infer_mode(self.preferred,
                                                   self.rejected))

  def __repr__(self):
    return (f'VersionConstraint(preferred={self.preferred!r}, '
            f'rejected={list(self.rejected)!r}, mode={self.mode.name})')

  @classmethod
  def of(cls,
         preferred: Optional[str],
         rejects: Iterable[str] = ()) -> VersionConstraint:
    """Build a constraint from its expressions, as read back from a cache."""
    return cls(preferred or '', rejects)

  @classmethod
  def strict(cls,
             version: str,
             scheme: Optional[VersionSelectorScheme] = None
            ) -> VersionConstraint:
    return cls().strictly(version, scheme)

  def prefer(self, version: str) -> VersionConstraint:
    """Prefer a version. Clears any rejects."""
    return VersionConstraint(version, ())

  def strictly(self,
               version: str,
               scheme: Optional[VersionSelectorScheme] = None
              ) -> VersionConstraint:
    """Prefer a version and reject every other version."""
    scheme = scheme or scheme_module.default_scheme()
    complement = scheme.complement_for_rejection(scheme.parse_selector(version))
    return VersionConstraint(version, (complement.text,), ConstraintMode.STRICT)

  def reject(self, *versions: str) -> VersionConstraint:
    """Keep the preferred version and reject the given expressions."""
    if not versions:
      return self.prefer(self.preferred)

    return VersionConstraint(self.preferred, versions,
                             ConstraintMode.PREFERRED_WITH_REJECTS)

  def normalize(self) -> VersionConstraint:
    """Copy with an unset preferred version replaced by ''."""
    return VersionConstraint(self.preferred or '', self.rejected, self.mode)

  @property
  def is_strict(self) -> bool:
    return self.mode == ConstraintMode.STRICT

  def get_preferred_version(self) -> Optional[str]:
    return self.preferred

  def get_rejected_versions(self) -> list[str]:
    return list(self.rejected)

  def get_preferred_selector(
      self, scheme: VersionSelectorScheme) -> VersionSelector:
    return scheme.parse_selector(self.preferred or '')

  def get_rejection_selector(
      self, scheme: VersionSelectorScheme) -> Optional[VersionSelector]:
    """Selector for the rejected versions, or None if nothing is rejected.

    Raises:
      UnsupportedMultipleRejects: if more than one version is rejected.
    """
    if not self.rejected:
      return None

    if len(self.rejected) == 1:
      return scheme.parse_selector(self.rejected[0])

    raise UnsupportedMultipleRejects(
        f'Multiple rejects are not yet supported: {list(self.rejected)}')

  def accepts(self, candidate, scheme: VersionSelectorScheme) -> bool:
    """Whether a candidate matches the preferred version and is not rejected."""
    if not scheme.matches(self.get_preferred_selector(scheme), candidate):
      return False

    rejection = self.get_rejection_selector(scheme)
    return rejection is None or not scheme.matches(rejection, candidate)


class MutableVersionConstraint:
  """Holds the current constraint of a declaration while it is configured.

  Not thread safe: configuration happens on a single thread before the
  constraint is handed to the resolver through `get()`.
  """

  def __init__(self, constraint: Optional[VersionConstraint] = None):
    self._constraint = constraint or VersionConstraint()

  def get(self) -> VersionConstraint:
    return self._constraint

  def prefer(self, version: str):
    self._constraint = self._constraint.prefer(version)

  def strictly(self,
               version: str,
               scheme: Optional[VersionSelectorScheme] = None):
    self._constraint = self._constraint.strictly(version, scheme)

  def reject(self, *versions: str):
    self._constraint = self._constraint.reject(*versions)


@attrs(frozen=True, slots=True)
class ModuleVersionSelector:
  """A module coordinate with its version constraint."""
  group: str = attrib()
  name: str = attrib()
  constraint: VersionConstraint = attrib(factory=VersionConstraint)

  def __str__(self):
    return f'{self.group}:{self.name}:{self.constraint.preferred or ""}'
