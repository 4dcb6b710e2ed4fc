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
"""Binary encoding of module version selectors for the resolution cache.

Record layout:

  [groupLen][group][nameLen][name][preferLen][prefer]
  [rejectCount]([rejectLen][reject])*

Lengths and counts are unsigned LEB128 varints (little-endian base 128),
strings are UTF-8. Records carry no version tag, bump
`config.cache_generation` when the layout changes.

Only the text of a constraint is stored, so neither encoding nor decoding
needs a selector scheme.
"""
from __future__ import annotations

import io
from typing import BinaryIO, Optional, Union

from .constraint import ModuleVersionSelector, VersionConstraint

# 32 bit values fit in 5 varint bytes.
_MAX_VARINT_BYTES = 5
_MAX_SMALL_INT = 0xFFFFFFFF


class TruncatedRecord(ValueError):
  """A cache record is truncated or corrupt."""


class Encoder:
  """Writes primitive values to a binary stream."""

  def __init__(self, stream: Optional[BinaryIO] = None):
    self._stream = stream if stream is not None else io.BytesIO()

  def write_small_int(self, value: int):
    if value < 0 or value > _MAX_SMALL_INT:
      raise ValueError(f'Value out of range for a small int: {value}')

    out = bytearray()
    while True:
      byte = value & 0x7f
      value >>= 7
      if value:
        out.append(byte | 0x80)
      else:
        out.append(byte)
        break

    self._stream.write(bytes(out))

  def write_string(self, value: str):
    data = value.encode('utf-8')
    self.write_small_int(len(data))
    self._stream.write(data)

  def getvalue(self) -> bytes:
    """Bytes written so far. Only for the default in-memory stream."""
    return self._stream.getvalue()


class Decoder:
  """Reads primitive values from a binary stream."""

  def __init__(self, data: Union[bytes, BinaryIO]):
    if isinstance(data, (bytes, bytearray, memoryview)):
      data = io.BytesIO(bytes(data))
    self._stream = data

  def _read_exactly(self, size: int) -> bytes:
    data = self._stream.read(size)
    if len(data) != size:
      raise TruncatedRecord(
          f'Expected {size} bytes, only {len(data)} available')
    return data

  def read_small_int(self) -> int:
    result = 0
    for i in range(_MAX_VARINT_BYTES):
      byte = self._read_exactly(1)[0]
      result |= (byte & 0x7f) << (7 * i)
      if not byte & 0x80:
        if result > _MAX_SMALL_INT:
          raise TruncatedRecord(f'Small int out of range: {result}')
        return result

    raise TruncatedRecord('Small int is longer than '
                          f'{_MAX_VARINT_BYTES} bytes')

  def read_string(self) -> str:
    data = self._read_exactly(self.read_small_int())
    try:
      return data.decode('utf-8')
    except UnicodeDecodeError as e:
      raise TruncatedRecord(f'Invalid UTF-8 string: {e}') from e

  def at_end(self) -> bool:
    position = self._stream.tell()
    at_end = not self._stream.read(1)
    self._stream.seek(position)
    return at_end


def write_constraint(encoder: Encoder, constraint: VersionConstraint):
  encoder.write_string(constraint.get_preferred_version() or '')
  rejected = constraint.get_rejected_versions()
  encoder.write_small_int(len(rejected))
  for reject in rejected:
    encoder.write_string(reject)


def read_constraint(decoder: Decoder) -> VersionConstraint:
  preferred = decoder.read_string()
  count = decoder.read_small_int()
  rejects = [decoder.read_string() for _ in range(count)]
  return VersionConstraint.of(preferred, rejects)


def write_selector(encoder: Encoder, selector: ModuleVersionSelector):
  encoder.write_string(selector.group)
  encoder.write_string(selector.name)
  write_constraint(encoder, selector.constraint)


def read_selector(decoder: Decoder) -> ModuleVersionSelector:
  group = decoder.read_string()
  name = decoder.read_string()
  return ModuleVersionSelector(group, name, read_constraint(decoder))


def encode(selector: ModuleVersionSelector) -> bytes:
  """Encode a single record."""
  encoder = Encoder()
  write_selector(encoder, selector)
  return encoder.getvalue()


def decode(data: bytes) -> ModuleVersionSelector:
  """Decode a single record. Trailing bytes are treated as corruption."""
  decoder = Decoder(data)
  selector = read_selector(decoder)
  if not decoder.at_end():
    raise TruncatedRecord('Unexpected trailing bytes after record')
  return selector
