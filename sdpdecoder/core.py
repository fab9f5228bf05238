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

from typing import Optional


# -----------------------------------------------------------------------------
# Utils
# -----------------------------------------------------------------------------
def name_or_number(dictionary: dict[int, str], number: int, width: int = 2) -> str:
    name = dictionary.get(number)
    if name is not None:
        return name
    return f'[0x{number:0{width}X}]'


def uuid_to_hex_str(uuid_bytes: bytes, separator: str = '') -> str:
    '''
    Format a UUID held in big-endian (wire) byte order.

    16 and 32-bit UUIDs are rendered as plain hex, 128-bit UUIDs are split in
    the usual 8-4-4-4-12 groups.
    '''
    if len(uuid_bytes) != 16:
        return uuid_bytes.hex().upper()

    return separator.join(
        [
            uuid_bytes[0:4].hex(),
            uuid_bytes[4:6].hex(),
            uuid_bytes[6:8].hex(),
            uuid_bytes[8:10].hex(),
            uuid_bytes[10:16].hex(),
        ]
    ).upper()


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class BaseSdpDecoderError(Exception):
    """Base Error raised by the SDP decoder."""


class InvalidArgumentError(BaseSdpDecoderError, ValueError):
    """Invalid Argument Error"""


class InvalidPacketError(BaseSdpDecoderError, ValueError):
    """Invalid Packet Error"""


class DataElementError(InvalidPacketError):
    """Base class for errors raised while decoding an SDP data element"""

    def __init__(self, message: str = '', offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f'{self.message} (at offset {self.offset})'


class TruncatedInputError(DataElementError):
    """Fewer bytes available than declared"""


class UnknownTypeError(DataElementError):
    """Element type code outside of the known range"""

    def __init__(
        self, element_type: int, message: str = '', offset: Optional[int] = None
    ) -> None:
        super().__init__(message or f'unknown element type {element_type}', offset)
        self.element_type = element_type


class InvalidSizeDescriptorError(DataElementError):
    """Size descriptor incompatible with the element type"""


class MaxDepthExceededError(DataElementError):
    """Elements nested beyond the configured limit"""

    def __init__(
        self, max_depth: int, message: str = '', offset: Optional[int] = None
    ) -> None:
        super().__init__(
            message or f'nesting deeper than the maximum depth ({max_depth})', offset
        )
        self.max_depth = max_depth


class InvalidBooleanValueError(DataElementError):
    """Boolean payload that is neither 0 nor 1"""
