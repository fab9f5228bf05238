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
import logging

from sdpdecoder.logging import ColorFormatter


# -----------------------------------------------------------------------------
def make_record(level: int) -> logging.LogRecord:
    return logging.LogRecord('sdpdecoder.test', level, __file__, 1, 'hello', None, None)


# -----------------------------------------------------------------------------
def test_color_formatter() -> None:
    formatter = ColorFormatter()

    output = formatter.format(make_record(logging.WARNING))
    assert output.endswith('hello')
    assert 'W sdpdecoder.test: ' in output
    assert '\x1b[' in output

    output = formatter.format(make_record(logging.DEBUG))
    assert 'D sdpdecoder.test: ' in output


# -----------------------------------------------------------------------------
def test_color_formatter_custom_level() -> None:
    output = ColorFormatter().format(make_record(25))
    assert output.endswith('hello')
