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
import dataclasses
import enum
import logging
import struct
from typing import Iterator, List, Optional, Sequence, Tuple, Union

import click

from sdpdecoder.core import (
    DataElementError,
    InvalidArgumentError,
    InvalidBooleanValueError,
    InvalidSizeDescriptorError,
    MaxDepthExceededError,
    TruncatedInputError,
    UnknownTypeError,
    name_or_number,
    uuid_to_hex_str,
)
from sdpdecoder.cursor import BytesLike, Cursor

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
# fmt: off
# pylint: disable=line-too-long

# Maximum nesting of SEQUENCE/ALTERNATIVE elements. The outermost element is at depth 0.
DEFAULT_MAX_DEPTH = 8

# Upper bound for a caller-supplied maximum depth, below the recursion limit
MAX_DEPTH_LIMIT = 64

SDP_SERVICE_RECORD_HANDLE_ATTRIBUTE_ID               = 0X0000
SDP_SERVICE_CLASS_ID_LIST_ATTRIBUTE_ID               = 0X0001
SDP_SERVICE_RECORD_STATE_ATTRIBUTE_ID                = 0X0002
SDP_SERVICE_ID_ATTRIBUTE_ID                          = 0X0003
SDP_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID            = 0X0004
SDP_BROWSE_GROUP_LIST_ATTRIBUTE_ID                   = 0X0005
SDP_LANGUAGE_BASE_ATTRIBUTE_ID_LIST_ATTRIBUTE_ID     = 0X0006
SDP_SERVICE_INFO_TIME_TO_LIVE_ATTRIBUTE_ID           = 0X0007
SDP_SERVICE_AVAILABILITY_ATTRIBUTE_ID                = 0X0008
SDP_BLUETOOTH_PROFILE_DESCRIPTOR_LIST_ATTRIBUTE_ID   = 0X0009
SDP_DOCUMENTATION_URL_ATTRIBUTE_ID                   = 0X000A
SDP_CLIENT_EXECUTABLE_URL_ATTRIBUTE_ID               = 0X000B
SDP_ICON_URL_ATTRIBUTE_ID                            = 0X000C
SDP_ADDITIONAL_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID = 0X000D

# Attribute Identifier (cf. Assigned Numbers for Service Discovery)
# used by AVRCP, HFP and A2DP
SDP_SUPPORTED_FEATURES_ATTRIBUTE_ID = 0x0311

SDP_ATTRIBUTE_ID_NAMES = {
    SDP_SERVICE_RECORD_HANDLE_ATTRIBUTE_ID:               'SDP_SERVICE_RECORD_HANDLE_ATTRIBUTE_ID',
    SDP_SERVICE_CLASS_ID_LIST_ATTRIBUTE_ID:               'SDP_SERVICE_CLASS_ID_LIST_ATTRIBUTE_ID',
    SDP_SERVICE_RECORD_STATE_ATTRIBUTE_ID:                'SDP_SERVICE_RECORD_STATE_ATTRIBUTE_ID',
    SDP_SERVICE_ID_ATTRIBUTE_ID:                          'SDP_SERVICE_ID_ATTRIBUTE_ID',
    SDP_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID:            'SDP_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID',
    SDP_BROWSE_GROUP_LIST_ATTRIBUTE_ID:                   'SDP_BROWSE_GROUP_LIST_ATTRIBUTE_ID',
    SDP_LANGUAGE_BASE_ATTRIBUTE_ID_LIST_ATTRIBUTE_ID:     'SDP_LANGUAGE_BASE_ATTRIBUTE_ID_LIST_ATTRIBUTE_ID',
    SDP_SERVICE_INFO_TIME_TO_LIVE_ATTRIBUTE_ID:           'SDP_SERVICE_INFO_TIME_TO_LIVE_ATTRIBUTE_ID',
    SDP_SERVICE_AVAILABILITY_ATTRIBUTE_ID:                'SDP_SERVICE_AVAILABILITY_ATTRIBUTE_ID',
    SDP_BLUETOOTH_PROFILE_DESCRIPTOR_LIST_ATTRIBUTE_ID:   'SDP_BLUETOOTH_PROFILE_DESCRIPTOR_LIST_ATTRIBUTE_ID',
    SDP_DOCUMENTATION_URL_ATTRIBUTE_ID:                   'SDP_DOCUMENTATION_URL_ATTRIBUTE_ID',
    SDP_CLIENT_EXECUTABLE_URL_ATTRIBUTE_ID:               'SDP_CLIENT_EXECUTABLE_URL_ATTRIBUTE_ID',
    SDP_ICON_URL_ATTRIBUTE_ID:                            'SDP_ICON_URL_ATTRIBUTE_ID',
    SDP_ADDITIONAL_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID: 'SDP_ADDITIONAL_PROTOCOL_DESCRIPTOR_LIST_ATTRIBUTE_ID',
    SDP_SUPPORTED_FEATURES_ATTRIBUTE_ID:                  'SDP_SUPPORTED_FEATURES_ATTRIBUTE_ID',
}

# fmt: on
# pylint: enable=line-too-long
# pylint: disable=invalid-name


# -----------------------------------------------------------------------------
class ElementType(enum.IntEnum):
    NIL = 0
    UNSIGNED_INTEGER = 1
    SIGNED_INTEGER = 2
    UUID = 3
    TEXT_STRING = 4
    BOOLEAN = 5
    SEQUENCE = 6
    ALTERNATIVE = 7
    URL = 8


# Types that may use a fixed size (size descriptor 0 to 4)
FIXED_SIZE_TYPES = frozenset(
    (
        ElementType.NIL,
        ElementType.UNSIGNED_INTEGER,
        ElementType.SIGNED_INTEGER,
        ElementType.UUID,
        ElementType.BOOLEAN,
    )
)

# Types that may use an extended length field (size descriptor 5 to 7)
VARIABLE_SIZE_TYPES = frozenset(
    (
        ElementType.UNSIGNED_INTEGER,
        ElementType.SIGNED_INTEGER,
        ElementType.UUID,
        ElementType.TEXT_STRING,
        ElementType.SEQUENCE,
        ElementType.ALTERNATIVE,
        ElementType.URL,
    )
)

COMPOSITE_TYPES = frozenset((ElementType.SEQUENCE, ElementType.ALTERNATIVE))

# Payload lengths allowed for types with a constrained width, whatever the encoding
VALID_LENGTHS = {
    ElementType.UNSIGNED_INTEGER: (1, 2, 4, 8, 16),
    ElementType.SIGNED_INTEGER: (1, 2, 4, 8, 16),
    ElementType.UUID: (2, 4, 16),
    ElementType.BOOLEAN: (1,),
}


# -----------------------------------------------------------------------------
def unsigned_integer_from_bytes(data: bytes) -> int:
    if len(data) == 1:
        return data[0]

    if len(data) == 2:
        return struct.unpack('>H', data)[0]

    if len(data) == 4:
        return struct.unpack('>I', data)[0]

    if len(data) == 8:
        return struct.unpack('>Q', data)[0]

    if len(data) == 16:
        return int.from_bytes(data, byteorder='big', signed=False)

    raise InvalidArgumentError(f'invalid integer length {len(data)}')


def signed_integer_from_bytes(data: bytes) -> int:
    if len(data) == 1:
        return struct.unpack('b', data)[0]

    if len(data) == 2:
        return struct.unpack('>h', data)[0]

    if len(data) == 4:
        return struct.unpack('>i', data)[0]

    if len(data) == 8:
        return struct.unpack('>q', data)[0]

    if len(data) == 16:
        return int.from_bytes(data, byteorder='big', signed=True)

    raise InvalidArgumentError(f'invalid integer length {len(data)}')


# -----------------------------------------------------------------------------
@dataclasses.dataclass(frozen=True)
class DataElement:
    '''
    See Bluetooth spec @ Vol 3, Part B - 3 DATA REPRESENTATION

    A decoded data element. Scalar elements carry their payload in `value`
    (an int for integers, a bool for booleans, the raw payload bytes for UUIDs,
    text strings and URLs, None for NIL). SEQUENCE and ALTERNATIVE elements
    carry their members in `children`, in wire order.

    `width` is the payload length declared in the header, `header_size` the
    number of bytes taken by the header itself.
    '''

    Type = ElementType

    NIL = ElementType.NIL
    UNSIGNED_INTEGER = ElementType.UNSIGNED_INTEGER
    SIGNED_INTEGER = ElementType.SIGNED_INTEGER
    UUID = ElementType.UUID
    TEXT_STRING = ElementType.TEXT_STRING
    BOOLEAN = ElementType.BOOLEAN
    SEQUENCE = ElementType.SEQUENCE
    ALTERNATIVE = ElementType.ALTERNATIVE
    URL = ElementType.URL

    TYPE_NAMES = {element_type: element_type.name for element_type in ElementType}

    kind: ElementType
    width: int
    value: Union[None, int, bool, bytes] = None
    children: Tuple[DataElement, ...] = ()
    header_size: int = 1

    @property
    def encoded_size(self) -> int:
        return self.header_size + self.width

    @property
    def is_composite(self) -> bool:
        return self.kind in COMPOSITE_TYPES

    @property
    def is_integer(self) -> bool:
        return self.kind in (ElementType.UNSIGNED_INTEGER, ElementType.SIGNED_INTEGER)

    @classmethod
    def from_bytes(
        cls, data: BytesLike, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> DataElement:
        '''
        Parse one element from the start of `data`.

        Bytes following the element are not examined; `encoded_size` tells how
        many were consumed.
        '''
        return _parse_top_level(Cursor(data), max_depth)

    @classmethod
    def list_from_bytes(
        cls, data: BytesLike, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> List[DataElement]:
        '''Parse a back-to-back concatenation of elements spanning all of `data`.'''
        cursor = Cursor(data)
        elements = []
        while cursor.remaining():
            elements.append(_parse_top_level(cursor, max_depth))
        return elements

    @classmethod
    def parse_from_bytes(
        cls, data: BytesLike, offset: int, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> Tuple[int, DataElement]:
        if offset > len(data):
            raise TruncatedInputError(
                f'offset {offset} past the end of {len(data)} bytes', offset
            )
        element = _parse_top_level(Cursor(data, offset), max_depth)
        return offset + element.encoded_size, element

    def walk(self) -> Iterator[DataElement]:
        '''Depth-first, pre-order iteration over this element and its descendants.'''
        yield self
        for child in self.children:
            yield from child.walk()

    def uuid_string(self) -> str:
        if self.kind != ElementType.UUID:
            raise InvalidArgumentError(f'{self.kind.name} element is not a UUID')

        assert isinstance(self.value, bytes)
        if len(self.value) == 2:
            return 'UUID-16:' + uuid_to_hex_str(self.value)
        if len(self.value) == 4:
            return 'UUID-32:' + uuid_to_hex_str(self.value)
        return uuid_to_hex_str(self.value, separator='-')

    def to_string(self, pretty: bool = False, indentation: int = 0) -> str:
        prefix = '  ' * indentation
        type_name = name_or_number(self.TYPE_NAMES, self.kind)
        if self.kind == ElementType.NIL:
            value_string = ''
        elif self.is_composite:
            container_separator = '\n' if pretty else ''
            element_separator = '\n' if pretty else ','
            elements = [
                element.to_string(pretty, indentation + 1 if pretty else 0)
                for element in self.children
            ]
            value_string = (
                f'[{container_separator}'
                f'{element_separator.join(elements)}'
                f'{container_separator}{prefix if pretty else ""}]'
            )
        elif self.is_integer:
            value_string = f'{self.value}#{self.width}'
        elif self.kind == ElementType.UUID:
            value_string = self.uuid_string()
        else:
            value_string = str(self.value)
        return f'{prefix}{type_name}({value_string})'

    def __str__(self) -> str:
        return self.to_string()


# -----------------------------------------------------------------------------
@dataclasses.dataclass(frozen=True)
class ElementHeader:
    kind: ElementType
    size_descriptor: int
    length: int
    size: int


def decode_header(cursor: Cursor) -> ElementHeader:
    '''
    Read one element header: a type/size byte, followed by an extended length
    field of 1, 2 or 4 bytes when the size descriptor is 5, 6 or 7.

    UUIDs are only accepted with a length of 2, 4 or 16 bytes (Vol 3, Part B -
    2.5.1), so the 1 and 8 byte fixed sizes are rejected for them, and BOOLEAN
    elements must be exactly 1 byte long.
    '''
    offset = cursor.tell()
    header = cursor.take_byte()
    element_type = header >> 3
    size_descriptor = header & 7

    try:
        kind = ElementType(element_type)
    except ValueError as error:
        raise UnknownTypeError(element_type, offset=offset) from error

    if size_descriptor <= 4:
        if kind not in FIXED_SIZE_TYPES:
            raise InvalidSizeDescriptorError(
                f'{kind.name} cannot use size descriptor {size_descriptor}', offset
            )
        length = 0 if kind == ElementType.NIL else 1 << size_descriptor
    else:
        if kind not in VARIABLE_SIZE_TYPES:
            raise InvalidSizeDescriptorError(
                f'{kind.name} cannot use size descriptor {size_descriptor}', offset
            )
        length = cursor.take_uint(1 << (size_descriptor - 5))

    valid_lengths = VALID_LENGTHS.get(kind)
    if valid_lengths is not None and length not in valid_lengths:
        raise InvalidSizeDescriptorError(
            f'invalid {kind.name} length {length}', offset
        )

    return ElementHeader(kind, size_descriptor, length, cursor.tell() - offset)


# -----------------------------------------------------------------------------
def parse_element(
    cursor: Cursor, depth: int = 0, max_depth: int = DEFAULT_MAX_DEPTH
) -> DataElement:
    '''
    Parse one element (recursively for SEQUENCE and ALTERNATIVE elements) and
    advance the cursor past it.

    Members of a composite element are parsed from a sub-cursor bounded by the
    declared content length, so they must fill it exactly.
    '''
    if not 0 <= max_depth <= MAX_DEPTH_LIMIT:
        raise InvalidArgumentError(
            f'maximum depth {max_depth} outside of [0, {MAX_DEPTH_LIMIT}]'
        )

    header = decode_header(cursor)
    kind = header.kind

    if kind == ElementType.NIL:
        return DataElement(kind, 0, header_size=header.size)

    if kind in COMPOSITE_TYPES:
        content = cursor.sub_cursor(header.length)
        if depth >= max_depth:
            raise MaxDepthExceededError(max_depth, offset=content.tell())
        children = []
        while content.remaining():
            children.append(parse_element(content, depth + 1, max_depth))
        return DataElement(
            kind, header.length, children=tuple(children), header_size=header.size
        )

    offset = cursor.tell()
    payload = cursor.take_bytes(header.length)
    value: Union[int, bool, bytes]
    if kind == ElementType.UNSIGNED_INTEGER:
        value = unsigned_integer_from_bytes(payload)
    elif kind == ElementType.SIGNED_INTEGER:
        value = signed_integer_from_bytes(payload)
    elif kind == ElementType.BOOLEAN:
        if payload[0] > 1:
            raise InvalidBooleanValueError(
                f'invalid boolean value 0x{payload[0]:02X}', offset
            )
        value = payload[0] == 1
    else:
        # UUID, TEXT_STRING and URL payloads are kept as-is
        value = payload

    return DataElement(kind, header.length, value, header_size=header.size)


def _parse_top_level(cursor: Cursor, max_depth: int) -> DataElement:
    try:
        return parse_element(cursor, 0, max_depth)
    except DataElementError as error:
        logger.debug(f'rejected data element: {error}')
        raise


# -----------------------------------------------------------------------------
class ServiceAttribute:
    def __init__(self, attribute_id: int, value: DataElement) -> None:
        self.id = attribute_id
        self.value = value

    @staticmethod
    def list_from_data_elements(
        elements: Sequence[DataElement],
    ) -> List[ServiceAttribute]:
        '''
        Interpret a flat list of elements as alternating attribute ID / value
        pairs, as found in an attribute list sequence.
        '''
        if len(elements) % 2:
            logger.warning('attribute list has an odd number of elements')

        attribute_list = []
        for i in range(0, len(elements) // 2):
            attribute_id, attribute_value = elements[2 * i : 2 * (i + 1)]
            if attribute_id.kind != ElementType.UNSIGNED_INTEGER:
                logger.warning('attribute ID element is not an integer')
                continue
            assert isinstance(attribute_id.value, int)
            attribute_list.append(ServiceAttribute(attribute_id.value, attribute_value))

        return attribute_list

    @staticmethod
    def list_from_data_element(element: DataElement) -> List[ServiceAttribute]:
        if element.kind != ElementType.SEQUENCE:
            raise InvalidArgumentError('attribute list must be a SEQUENCE')
        return ServiceAttribute.list_from_data_elements(element.children)

    @staticmethod
    def find_attribute_in_list(
        attribute_list: List[ServiceAttribute], attribute_id: int
    ) -> Optional[DataElement]:
        return next(
            (
                attribute.value
                for attribute in attribute_list
                if attribute.id == attribute_id
            ),
            None,
        )

    @staticmethod
    def id_name(id_code: int) -> str:
        return name_or_number(SDP_ATTRIBUTE_ID_NAMES, id_code, 4)

    def to_string(self, with_colors: bool = False) -> str:
        if with_colors:
            return (
                f'Attribute(id={click.style(self.id_name(self.id), fg="magenta")},'
                f'value={self.value})'
            )

        return f'Attribute(id={self.id_name(self.id)},value={self.value})'

    def __str__(self) -> str:
        return self.to_string()
