# Copyright 2021-2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# Imports
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Optional, Union
from typing_extensions import Self

from sdpdecoder.core import InvalidArgumentError, TruncatedInputError


# -----------------------------------------------------------------------------
BytesLike = Union[bytes, bytearray, memoryview]


# -----------------------------------------------------------------------------
class Cursor:
    '''
    Sequential, bounds-checked reader over a fixed byte buffer.

    A cursor reads from `offset` up to (but not including) `end`. Every read is
    checked against that bound before anything is consumed, so a failed read
    leaves the position unchanged. Sub-cursors share the same buffer and are
    restricted to a region of their parent.
    '''

    __slots__ = ('buffer', 'position', 'end')

    def __init__(
        self, data: BytesLike, offset: int = 0, end: Optional[int] = None
    ) -> None:
        self.buffer = memoryview(data).cast('B')
        if end is None:
            end = len(self.buffer)
        if not 0 <= offset <= end <= len(self.buffer):
            raise InvalidArgumentError(
                f'invalid cursor bounds [{offset}:{end}] for {len(self.buffer)} bytes'
            )
        self.position = offset
        self.end = end

    def remaining(self) -> int:
        return self.end - self.position

    def tell(self) -> int:
        return self.position

    def _check(self, size: int) -> None:
        if size < 0:
            raise InvalidArgumentError(f'negative read size {size}')
        if size > self.remaining():
            raise TruncatedInputError(
                f'need {size} bytes, only {self.remaining()} available', self.position
            )

    def take_byte(self) -> int:
        self._check(1)
        value = self.buffer[self.position]
        self.position += 1
        return value

    def take_bytes(self, size: int) -> bytes:
        self._check(size)
        data = bytes(self.buffer[self.position : self.position + size])
        self.position += size
        return data

    def take_uint(self, size: int) -> int:
        '''Read a big-endian unsigned integer of `size` bytes.'''
        return int.from_bytes(self.take_bytes(size), byteorder='big')

    def sub_cursor(self, size: int) -> Self:
        '''
        Return a cursor restricted to exactly the next `size` bytes, and move
        this cursor past them.
        '''
        self._check(size)
        sub_cursor = self.__class__(self.buffer, self.position, self.position + size)
        self.position += size
        return sub_cursor

    def __repr__(self) -> str:
        return f'Cursor(position={self.position}, end={self.end})'
