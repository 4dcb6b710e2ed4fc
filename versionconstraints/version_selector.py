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
"""Version selectors.

A selector is the parsed, matchable form of a version expression. Selectors
are plain immutable values: each variant only carries the data it needs, and
matching is done by `matches` / `select`, which dispatch over the variants.

Selectors are never persisted. The textual form (`text`) is what gets stored,
and parsing it again yields an equal selector.
"""
from __future__ import annotations

from typing import Iterable, Optional, Union

from attr import attrib, attrs

from .comparators import VersionComparator

# Statuses in increasing order of maturity.
DEFAULT_STATUS_SCHEME = ('integration', 'milestone', 'release')


class SelectorError(ValueError):
  """Base class for selector errors."""


class InvalidSelectorExpression(SelectorError):
  """A range-shaped version expression could not be parsed."""

  def __init__(self, expression: str, reason: str):
    super().__init__(f'Invalid version expression {expression!r}: {reason}')
    self.expression = expression
    self.reason = reason


class StatusRequired(SelectorError):
  """A status-based selector was matched against a version with no status."""


@attrs(frozen=True, slots=True)
class Candidate:
  """A candidate version offered by the resolver, with its status if known."""
  version: str = attrib()
  status: Optional[str] = attrib(default=None)


class VersionSelector:
  """Common behaviour of all selector variants."""

  __slots__ = ()

  @property
  def text(self) -> str:
    raise NotImplementedError

  @property
  def is_dynamic(self) -> bool:
    """Whether the selector can match more than one version."""
    return True

  @property
  def requires_metadata(self) -> bool:
    """Whether matching needs the candidate's status."""
    return False

  @property
  def matches_uniquely(self) -> bool:
    return False

  def __str__(self) -> str:
    return self.text


@attrs(frozen=True, slots=True)
class ExactVersionSelector(VersionSelector):
  """Matches a single literal version."""
  version: str = attrib()

  @property
  def text(self) -> str:
    return self.version

  @property
  def is_dynamic(self) -> bool:
    return False

  @property
  def matches_uniquely(self) -> bool:
    return True


@attrs(frozen=True, slots=True)
class VersionRangeSelector(VersionSelector):
  """Matches versions between two bounds. A missing bound is infinite."""
  lower: Optional[str] = attrib()
  lower_inclusive: bool = attrib()
  upper: Optional[str] = attrib()
  upper_inclusive: bool = attrib()
  # The expression as written, e.g. '[1.0, 2.0)' and '[1.0,2.0)' are equal.
  expression: str = attrib(eq=False)

  @property
  def text(self) -> str:
    return self.expression


@attrs(frozen=True, slots=True)
class LatestVersionSelector(VersionSelector):
  """Matches the highest version with at least the given status."""
  status: str = attrib()

  @property
  def text(self) -> str:
    return 'latest.' + self.status

  @property
  def requires_metadata(self) -> bool:
    return True


@attrs(frozen=True, slots=True)
class SubVersionSelector(VersionSelector):
  """Matches versions starting with a prefix, e.g. '1.+'.

  The empty prefix matches every version.
  """
  prefix: str = attrib()
  # '' for the unconstrained expression, otherwise prefix + '+'.
  expression: str = attrib(eq=False)

  @property
  def text(self) -> str:
    return self.expression


@attrs(frozen=True, slots=True)
class InverseVersionSelector(VersionSelector):
  """Matches every version the wrapped selector does not."""
  selector: VersionSelector = attrib()

  @property
  def text(self) -> str:
    return '!(' + self.selector.text + ')'

  @property
  def requires_metadata(self) -> bool:
    return self.selector.requires_metadata


def as_candidate(candidate: Union[str, Candidate]) -> Candidate:
  if isinstance(candidate, Candidate):
    return candidate
  return Candidate(candidate)


def _in_range(selector: VersionRangeSelector, version: str,
              comparator: VersionComparator) -> bool:
  """Check a version against both bounds of a range."""
  if selector.lower is not None:
    result = comparator.compare(version, selector.lower)
    if result < 0 or (result == 0 and not selector.lower_inclusive):
      return False

  if selector.upper is not None:
    result = comparator.compare(version, selector.upper)
    if result > 0 or (result == 0 and not selector.upper_inclusive):
      return False

  return True


def _status_at_least(selector: LatestVersionSelector, candidate: Candidate,
                     status_scheme: tuple[str, ...]) -> bool:
  if candidate.status is None:
    raise StatusRequired(
        f'Selector {selector.text!r} needs the status of version '
        f'{candidate.version!r}')

  # Unknown statuses never match.
  if (selector.status not in status_scheme or
      candidate.status not in status_scheme):
    return False

  return (status_scheme.index(candidate.status) >=
          status_scheme.index(selector.status))


def matches(selector: VersionSelector,
            candidate: Union[str, Candidate],
            comparator: VersionComparator,
            status_scheme: tuple[str, ...] = DEFAULT_STATUS_SCHEME) -> bool:
  """Return whether a candidate version satisfies a selector."""
  candidate = as_candidate(candidate)

  if isinstance(selector, ExactVersionSelector):
    return candidate.version == selector.version

  if isinstance(selector, VersionRangeSelector):
    return _in_range(selector, candidate.version, comparator)

  if isinstance(selector, SubVersionSelector):
    return candidate.version.startswith(selector.prefix)

  if isinstance(selector, LatestVersionSelector):
    return _status_at_least(selector, candidate, status_scheme)

  if isinstance(selector, InverseVersionSelector):
    return not matches(selector.selector, candidate, comparator, status_scheme)

  raise TypeError(f'Unknown selector type: {type(selector).__name__}')


def select(selector: VersionSelector,
           candidates: Iterable[Union[str, Candidate]],
           comparator: VersionComparator,
           status_scheme: tuple[str, ...] = DEFAULT_STATUS_SCHEME
          ) -> Optional[Candidate]:
  """Return the highest candidate matching the selector, if any.

  On equal versions the first candidate wins.
  """
  best = None
  for candidate in candidates:
    candidate = as_candidate(candidate)
    if not matches(selector, candidate, comparator, status_scheme):
      continue

    if best is None or comparator.compare(candidate.version, best.version) > 0:
      best = candidate

  return best
