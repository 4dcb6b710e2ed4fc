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
"""Default version comparator tests."""

import itertools
import os
import unittest

from . import default
from .comparator_base import EQUAL, GREATER, LESS


class DefaultVersionTest(unittest.TestCase):
  """Default version parsing tests."""

  def test_parts(self):
    """Test splitting into parts."""
    version = default.Version.from_string('1.02-RC_3+build')
    self.assertEqual(
        (default.VersionPart(1, None), default.VersionPart(2, None),
         default.VersionPart(None, 'rc'), default.VersionPart(3, None),
         default.VersionPart(None, 'build')), version.parts)
    self.assertEqual('1.02-RC_3+build', str(version))

  def test_trailing_zeros(self):
    """Test trailing zeros are trimmed."""
    self.assertEqual((default.VersionPart(1, None),),
                     default.Version.from_string('1.0.0').parts)
    self.assertEqual((), default.Version.from_string('').parts)

  def test_hash(self):
    """Test equal versions hash equally."""
    self.assertEqual(
        hash(default.Version.from_string('1.0')),
        hash(default.Version.from_string('1.0.0')))


class DefaultVersionComparatorTest(unittest.TestCase):
  """Default version comparator tests."""
  _TEST_DATA_DIR = os.path.join(
      os.path.dirname(os.path.abspath(__file__)), 'testdata')

  def setUp(self):
    self.comparator = default.DefaultVersionComparator()

  def test_cases(self):
    """Test ordering cases from the test data file."""
    expected = {'<': LESS, '=': EQUAL, '>': GREATER}
    with open(os.path.join(self._TEST_DATA_DIR,
                           'default_test_cases.txt')) as file:
      for line in file.readlines():
        if line.startswith('//') or line.isspace():
          continue
        pieces = line.strip('\n').split(' ')
        if pieces[1] not in expected:
          raise RuntimeError('Input not expected: ' + pieces[1])

        self.assertEqual(expected[pieces[1]],
                         self.comparator.compare(pieces[0], pieces[2]), pieces)
        # The reverse comparison must agree.
        self.assertEqual(-expected[pieces[1]],
                         self.comparator.compare(pieces[2], pieces[0]), pieces)

  def test_totality(self):
    """Test exactly one relation holds and the order is transitive."""
    sample = ['1.0', '1.1', '2.0-rc', '2.0']
    for a, b in itertools.product(sample, repeat=2):
      result = self.comparator.compare(a, b)
      self.assertEqual(1, [result < 0, result == 0, result > 0].count(True))

    for a, b in zip(sample, sample[1:]):
      self.assertEqual(LESS, self.comparator.compare(a, b))
    for a, b in itertools.combinations(sample, 2):
      self.assertEqual(LESS, self.comparator.compare(a, b), (a, b))

  def test_malformed(self):
    """Test malformed versions do not raise."""
    self.assertEqual(LESS, self.comparator.compare('!!', '1'))
    self.assertEqual(EQUAL, self.comparator.compare('', '0'))
    self.assertEqual(LESS, self.comparator.compare('1.x', '1.y'))
    # Non ASCII digits are qualifiers.
    self.assertEqual(LESS, self.comparator.compare('1.²', '1.0.1'))

  def test_sort_versions(self):
    """Test sort_versions."""
    versions = ['2.0', '1.0-SNAPSHOT', '1.10', '1.0', '2.0-rc1', '1.2']
    self.comparator.sort_versions(versions)
    self.assertEqual(['1.0-SNAPSHOT', '1.0', '1.2', '1.10', '2.0-rc1', '2.0'],
                     versions)

  def test_max_version(self):
    """Test max_version."""
    self.assertEqual('1.10', self.comparator.max_version(['1.2', '1.10', '1.9']))
    self.assertIsNone(self.comparator.max_version([]))


if __name__ == '__main__':
  unittest.main()
