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
"""Version selector scheme: parses version expressions into selectors."""
from __future__ import annotations

import functools
import logging
from typing import Iterable, Optional, Union

from . import comparators
from . import config
from .comparators import VersionComparator
from .version_selector import (DEFAULT_STATUS_SCHEME, Candidate,
                               ExactVersionSelector, InvalidSelectorExpression,
                               InverseVersionSelector, LatestVersionSelector,
                               SubVersionSelector, VersionRangeSelector,
                               VersionSelector)
from . import version_selector

_LATEST_PREFIX = 'latest.'
_INVERSE_PREFIX = '!('
_INVERSE_SUFFIX = ')'

# '[' inclusive, ']' and '(' exclusive.
_RANGE_OPENERS = {'[': True, ']': False, '(': False}
# ']' inclusive, '[' and ')' exclusive.
_RANGE_CLOSERS = {']': True, '[': False, ')': False}
_INFINITE_LOWER = '('
_INFINITE_UPPER = ')'
_RANGE_SPECIAL_CHARS = frozenset('[](),')


def _parse_range(expression: str) -> VersionRangeSelector:
  """Parse a bracketed range such as '[1.0,2.0)', '(,2.0]' or '[1.0]'."""
  opener = expression[0]
  closer = expression[-1]
  if len(expression) < 2 or closer not in _RANGE_CLOSERS:
    raise InvalidSelectorExpression(expression, 'unterminated range')

  inner = expression[1:-1]
  bounds = [bound.strip() for bound in inner.split(',')]
  for bound in bounds:
    if _RANGE_SPECIAL_CHARS.intersection(bound):
      raise InvalidSelectorExpression(expression, 'mismatched brackets')

  if len(bounds) == 1:
    # '[1.0]' is the only single value form.
    if opener != '[' or closer != ']' or not bounds[0]:
      raise InvalidSelectorExpression(expression, 'expected two bounds')
    return VersionRangeSelector(bounds[0], True, bounds[0], True, expression)

  if len(bounds) != 2:
    raise InvalidSelectorExpression(expression, 'too many bounds')

  lower, upper = bounds
  if not lower and not upper:
    raise InvalidSelectorExpression(expression, 'no bounds')

  if not lower and opener != _INFINITE_LOWER:
    raise InvalidSelectorExpression(
        expression, f'infinite lower bound must use {_INFINITE_LOWER!r}')

  if not upper and closer != _INFINITE_UPPER:
    raise InvalidSelectorExpression(
        expression, f'infinite upper bound must use {_INFINITE_UPPER!r}')

  return VersionRangeSelector(lower or None, _RANGE_OPENERS[opener], upper or
                              None, _RANGE_CLOSERS[closer], expression)


class VersionSelectorScheme:
  """Turns version expressions into selectors and matches candidates."""

  def __init__(self,
               comparator: VersionComparator,
               status_scheme: Optional[Iterable[str]] = None):
    self.comparator = comparator
    self.status_scheme = tuple(status_scheme or DEFAULT_STATUS_SCHEME)

  def __repr__(self):
    return (f'VersionSelectorScheme({self.comparator.name}, '
            f'{self.status_scheme!r})')

  def parse_selector(self, expression: str) -> VersionSelector:
    """Parse a version expression.

    Raises:
      InvalidSelectorExpression: for malformed ranges. Any other expression
        that cannot be classified is treated as an exact version.
    """
    if not expression:
      # Unconstrained.
      return SubVersionSelector('', expression)

    if (expression.startswith(_INVERSE_PREFIX) and
        expression.endswith(_INVERSE_SUFFIX)):
      inner = expression[len(_INVERSE_PREFIX):-len(_INVERSE_SUFFIX)]
      return InverseVersionSelector(self.parse_selector(inner))

    if expression.startswith(_LATEST_PREFIX) and len(expression) > len(
        _LATEST_PREFIX):
      return LatestVersionSelector(expression[len(_LATEST_PREFIX):])

    if expression.endswith('+'):
      return SubVersionSelector(expression[:-1], expression)

    if expression[0] in _RANGE_OPENERS:
      return _parse_range(expression)

    if (expression.startswith('!') or expression == _LATEST_PREFIX or
        expression != expression.strip()):
      logging.debug('Treating version expression %r as an exact version',
                    expression)

    return ExactVersionSelector(expression)

  def complement_for_rejection(
      self, selector: VersionSelector) -> InverseVersionSelector:
    """Selector matching exactly the versions `selector` does not match."""
    return InverseVersionSelector(selector)

  def matches(self, selector: VersionSelector,
              candidate: Union[str, Candidate]) -> bool:
    return version_selector.matches(selector, candidate, self.comparator,
                                    self.status_scheme)

  def select(self, selector: VersionSelector,
             candidates: Iterable[Union[str, Candidate]]) -> Optional[Candidate]:
    """Highest candidate matching the selector."""
    return version_selector.select(selector, candidates, self.comparator,
                                   self.status_scheme)


@functools.lru_cache(maxsize=None)
def _scheme_for(comparator_name: str,
                status_scheme: tuple[str, ...]) -> VersionSelectorScheme:
  comparator = comparators.get(comparator_name)
  if comparator is None:
    raise ValueError(f'Unknown version comparator {comparator_name!r}, '
                     f'expected one of {comparators.names()}')

  return VersionSelectorScheme(comparator, status_scheme)


def default_scheme() -> VersionSelectorScheme:
  """The scheme described by the current configuration."""
  return _scheme_for(config.comparator, tuple(config.status_scheme))
