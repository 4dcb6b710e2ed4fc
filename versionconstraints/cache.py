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
"""Resolution cache: encoded module version selectors keyed by module."""
from __future__ import annotations

import datetime
import logging
from typing import Any, Dict, Hashable, Optional

from . import codec
from . import config
from .constraint import ModuleVersionSelector

CacheKey = Hashable


class Cache:
  """Cache Interface"""

  def get(self, key: CacheKey) -> Any | None:
    raise NotImplementedError

  def set(self, key: CacheKey, value: Any, ttl: int) -> None:
    raise NotImplementedError

  def delete(self, key: CacheKey) -> None:
    raise NotImplementedError


class _CacheEntry:
  data: Any
  expiry: float

  def __init__(self, data: Any, ttl: int) -> None:
    self.data = data
    self.expiry = datetime.datetime.now().timestamp() + ttl


class InMemoryCache(Cache):
  """In memory cache implementation. Not thread safe."""

  key_val_map: Dict[CacheKey, _CacheEntry]

  def __init__(self) -> None:
    self.key_val_map = {}

  def get(self, key: CacheKey) -> Any | None:
    entry: _CacheEntry | None = self.key_val_map.get(key)
    if not entry:
      return None

    if entry.expiry >= datetime.datetime.now().timestamp():
      return entry.data

    self.key_val_map.pop(key)
    return None

  def set(self, key: CacheKey, value: Any, ttl: int) -> None:
    self.key_val_map[key] = _CacheEntry(value, ttl)

  def delete(self, key: CacheKey) -> None:
    self.key_val_map.pop(key, None)


class ResolutionCache:
  """Stores module version selectors across resolution runs.

  Records are stored encoded, keyed by (generation, group, name). Records
  from another generation are never read, so bumping the generation
  invalidates everything written before a layout change.
  """

  def __init__(self,
               cache: Optional[Cache] = None,
               generation: Optional[int] = None,
               ttl: Optional[int] = None):
    if cache is None:
      cache = config.shared_cache or InMemoryCache()
    self._cache = cache
    self.generation = (
        generation if generation is not None else config.cache_generation)
    self.ttl = ttl if ttl is not None else config.cache_ttl

  def _key(self, group: str, name: str) -> CacheKey:
    return (self.generation, group, name)

  def put(self, selector: ModuleVersionSelector) -> None:
    self._cache.set(
        self._key(selector.group, selector.name), codec.encode(selector),
        self.ttl)

  def get(self, group: str, name: str) -> Optional[ModuleVersionSelector]:
    """Cached selector for a module, or None on a miss.

    Corrupt records are discarded and reported as a miss.
    """
    key = self._key(group, name)
    data = self._cache.get(key)
    if data is None:
      return None

    try:
      return codec.decode(data)
    except codec.TruncatedRecord as e:
      logging.warning('Discarding corrupt cache record for %s:%s: %s', group,
                      name, e)
      self._cache.delete(key)
      return None

  def invalidate(self, group: str, name: str) -> None:
    self._cache.delete(self._key(group, name))
