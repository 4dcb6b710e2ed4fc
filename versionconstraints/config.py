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
"""Process-wide configuration.

Values can be set directly or loaded from a YAML file, e.g.

    comparator: semver
    status_scheme: [integration, milestone, release]
    cache_generation: 2
    cache_ttl: 3600
"""
from __future__ import annotations

import logging
import typing

import yaml

from .version_selector import DEFAULT_STATUS_SCHEME

if typing.TYPE_CHECKING:
  from .cache import Cache

# Name of the comparator used by the default selector scheme.
comparator = 'default'
status_scheme: tuple[str, ...] = DEFAULT_STATUS_SCHEME

# Bump when the cache record layout changes.
cache_generation = 1
cache_ttl = 24 * 60 * 60

shared_cache: typing.Optional[Cache] = None

_KEYS = ('comparator', 'status_scheme', 'cache_generation', 'cache_ttl')


def set_cache(cache: typing.Optional[Cache]):
  """Configures the cache shared by resolution caches."""
  global shared_cache
  shared_cache = cache


def reset():
  """Restore the default configuration."""
  global comparator, status_scheme, cache_generation, cache_ttl
  comparator = 'default'
  status_scheme = DEFAULT_STATUS_SCHEME
  cache_generation = 1
  cache_ttl = 24 * 60 * 60
  set_cache(None)


def _check_type(key, value, expected_type):
  # bool is an int, but never a valid value here.
  if not isinstance(value, expected_type) or isinstance(value, bool):
    raise ValueError(f'Config value {key!r} must be a '
                     f'{expected_type.__name__}, got {value!r}')


def apply(values: dict[str, typing.Any]):
  """Apply a mapping of configuration values."""
  global comparator, status_scheme, cache_generation, cache_ttl

  unknown = set(values) - set(_KEYS)
  if unknown:
    raise ValueError(f'Unknown config keys: {", ".join(sorted(unknown))}')

  if 'comparator' in values:
    _check_type('comparator', values['comparator'], str)
    comparator = values['comparator']

  if 'status_scheme' in values:
    scheme = values['status_scheme']
    if (not isinstance(scheme, list) or not scheme or
        not all(isinstance(status, str) for status in scheme)):
      raise ValueError(
          f'Config value \'status_scheme\' must be a list of statuses, '
          f'got {scheme!r}')
    status_scheme = tuple(scheme)

  if 'cache_generation' in values:
    _check_type('cache_generation', values['cache_generation'], int)
    cache_generation = values['cache_generation']

  if 'cache_ttl' in values:
    _check_type('cache_ttl', values['cache_ttl'], int)
    cache_ttl = values['cache_ttl']


def load(path: str):
  """Load configuration from a YAML file."""
  with open(path) as f:
    data = yaml.safe_load(f)

  if data is None:
    data = {}
  if not isinstance(data, dict):
    raise ValueError(f'Config file {path} did not parse into a mapping.')

  apply(data)
  logging.info('Loaded version constraint config from %s', path)
