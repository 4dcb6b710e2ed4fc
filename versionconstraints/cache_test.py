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
"""Resolution cache tests."""

import unittest

from . import cache
from . import config
from .constraint import ModuleVersionSelector, VersionConstraint


class InMemoryCacheTest(unittest.TestCase):
  """InMemoryCache tests."""

  def test_get_set(self):
    """Test get and set."""
    test_cache = cache.InMemoryCache()
    self.assertIsNone(test_cache.get('key'))
    test_cache.set('key', b'value', 60)
    self.assertEqual(b'value', test_cache.get('key'))
    test_cache.delete('key')
    self.assertIsNone(test_cache.get('key'))
    # Deleting a missing key is fine.
    test_cache.delete('key')

  def test_expiry(self):
    """Test expired entries are dropped."""
    test_cache = cache.InMemoryCache()
    test_cache.set('key', b'value', -1)
    self.assertIsNone(test_cache.get('key'))
    self.assertNotIn('key', test_cache.key_val_map)


class ResolutionCacheTest(unittest.TestCase):
  """ResolutionCache tests."""

  def setUp(self):
    self.backing = cache.InMemoryCache()
    self.resolution_cache = cache.ResolutionCache(self.backing, generation=1)
    self.selector = ModuleVersionSelector('org.example', 'lib',
                                          VersionConstraint('1.0', ['!(1.0)']))

  def tearDown(self):
    config.reset()

  def test_put_get(self):
    """Test records round trip through the cache."""
    self.assertIsNone(self.resolution_cache.get('org.example', 'lib'))
    self.resolution_cache.put(self.selector)
    self.assertEqual(self.selector,
                     self.resolution_cache.get('org.example', 'lib'))
    self.assertIsInstance(self.backing.get((1, 'org.example', 'lib')), bytes)

  def test_invalidate(self):
    """Test invalidate."""
    self.resolution_cache.put(self.selector)
    self.resolution_cache.invalidate('org.example', 'lib')
    self.assertIsNone(self.resolution_cache.get('org.example', 'lib'))

  def test_corrupt_record_is_a_miss(self):
    """Test corrupt records are discarded."""
    self.backing.set((1, 'org.example', 'lib'), b'\x01g\x05', 60)
    with self.assertLogs(level='WARNING') as logs:
      self.assertIsNone(self.resolution_cache.get('org.example', 'lib'))
    self.assertIn('org.example:lib', logs.output[0])
    self.assertIsNone(self.backing.get((1, 'org.example', 'lib')))

  def test_generation(self):
    """Test records of another generation are not read."""
    self.resolution_cache.put(self.selector)
    newer = cache.ResolutionCache(self.backing, generation=2)
    self.assertIsNone(newer.get('org.example', 'lib'))
    self.assertEqual(self.selector,
                     self.resolution_cache.get('org.example', 'lib'))

  def test_config_defaults(self):
    """Test defaults come from configuration."""
    shared = cache.InMemoryCache()
    config.set_cache(shared)
    config.cache_generation = 7
    config.cache_ttl = 5

    resolution_cache = cache.ResolutionCache()
    self.assertEqual(7, resolution_cache.generation)
    self.assertEqual(5, resolution_cache.ttl)
    resolution_cache.put(self.selector)
    self.assertIsNotNone(shared.get((7, 'org.example', 'lib')))


if __name__ == '__main__':
  unittest.main()
