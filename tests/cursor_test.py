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
import pytest

from sdpdecoder.core import InvalidArgumentError, TruncatedInputError
from sdpdecoder.cursor import Cursor


# -----------------------------------------------------------------------------
def test_take() -> None:
    cursor = Cursor(bytes([1, 2, 3, 4, 5, 6, 7]))
    assert cursor.remaining() == 7
    assert cursor.take_byte() == 1
    assert cursor.take_bytes(2) == bytes([2, 3])
    assert cursor.take_uint(2) == 0x0405
    assert cursor.take_bytes(0) == b''
    assert cursor.tell() == 5
    assert cursor.remaining() == 2
    assert cursor.take_bytes(2) == bytes([6, 7])
    assert cursor.remaining() == 0


# -----------------------------------------------------------------------------
def test_underrun() -> None:
    cursor = Cursor(bytes([1, 2, 3]))
    cursor.take_byte()

    with pytest.raises(TruncatedInputError) as error:
        cursor.take_bytes(3)
    assert error.value.offset == 1

    # Nothing consumed by the failed read
    assert cursor.tell() == 1
    assert cursor.take_bytes(2) == bytes([2, 3])

    with pytest.raises(TruncatedInputError):
        cursor.take_byte()
    with pytest.raises(TruncatedInputError):
        cursor.take_uint(1)

    with pytest.raises(TruncatedInputError):
        Cursor(b'').take_byte()


# -----------------------------------------------------------------------------
def test_sub_cursor() -> None:
    cursor = Cursor(bytes([1, 2, 3, 4, 5]))
    cursor.take_byte()
    sub_cursor = cursor.sub_cursor(2)

    # The parent moves past the sub-cursor region
    assert cursor.tell() == 3
    assert cursor.take_byte() == 4

    # The sub-cursor is limited to its region, with absolute offsets
    assert sub_cursor.tell() == 1
    assert sub_cursor.remaining() == 2
    with pytest.raises(TruncatedInputError):
        sub_cursor.take_bytes(3)
    assert sub_cursor.take_bytes(2) == bytes([2, 3])
    with pytest.raises(TruncatedInputError):
        sub_cursor.take_byte()

    nested = Cursor(bytes([1, 2, 3])).sub_cursor(3).sub_cursor(2)
    assert nested.take_bytes(2) == bytes([1, 2])

    cursor = Cursor(bytes([1, 2]))
    with pytest.raises(TruncatedInputError):
        cursor.sub_cursor(3)
    assert cursor.tell() == 0


# -----------------------------------------------------------------------------
def test_bytes_like_inputs() -> None:
    assert Cursor(bytearray([1, 2])).take_bytes(2) == bytes([1, 2])
    assert Cursor(memoryview(bytes([1, 2, 3]))[1:]).take_byte() == 2
    assert isinstance(Cursor(bytearray([1])).take_bytes(1), bytes)


# -----------------------------------------------------------------------------
def test_invalid_arguments() -> None:
    cursor = Cursor(bytes([1, 2]))
    with pytest.raises(InvalidArgumentError):
        cursor.take_bytes(-1)
    with pytest.raises(InvalidArgumentError):
        cursor.sub_cursor(-1)
    with pytest.raises(InvalidArgumentError):
        Cursor(bytes([1, 2]), offset=3)
    with pytest.raises(InvalidArgumentError):
        Cursor(bytes([1, 2]), offset=1, end=0)

    cursor = Cursor(bytes([1, 2, 3]), offset=1, end=2)
    assert cursor.remaining() == 1
    assert cursor.take_byte() == 2
