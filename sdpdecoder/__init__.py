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

from sdpdecoder.core import (
    DataElementError,
    InvalidBooleanValueError,
    InvalidSizeDescriptorError,
    MaxDepthExceededError,
    TruncatedInputError,
    UnknownTypeError,
)
from sdpdecoder.cursor import Cursor
from sdpdecoder.sdp import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    DataElement,
    ElementHeader,
    ServiceAttribute,
    decode_header,
    parse_element,
)

__all__ = [
    'DEFAULT_MAX_DEPTH',
    'MAX_DEPTH_LIMIT',
    'Cursor',
    'DataElement',
    'DataElementError',
    'ElementHeader',
    'InvalidBooleanValueError',
    'InvalidSizeDescriptorError',
    'MaxDepthExceededError',
    'ServiceAttribute',
    'TruncatedInputError',
    'UnknownTypeError',
    'decode_header',
    'parse_element',
]
