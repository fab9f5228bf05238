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
from click.testing import CliRunner

from apps.dump import main


# -----------------------------------------------------------------------------
ATTRIBUTE_LIST_HEX = '3510 090000 0A00010001 090001 350319110A'


# -----------------------------------------------------------------------------
def test_dump_hex_arguments() -> None:
    result = CliRunner().invoke(main, ['--compact', '35', '03', '09012C'])
    assert result.exit_code == 0
    assert 'SEQUENCE([UNSIGNED_INTEGER(300#2)])' in result.output

    result = CliRunner().invoke(main, ['35:03:09:01:2C'])
    assert result.exit_code == 0
    assert 'SEQUENCE([\n  UNSIGNED_INTEGER(300#2)\n])' in result.output


# -----------------------------------------------------------------------------
def test_dump_multiple() -> None:
    result = CliRunner().invoke(main, ['--multiple', '0801', '00'])
    assert result.exit_code == 0
    assert 'UNSIGNED_INTEGER(1#1)\nNIL()' in result.output


# -----------------------------------------------------------------------------
def test_dump_attribute_list() -> None:
    result = CliRunner().invoke(
        main, ['--attribute-list', '--compact'] + ATTRIBUTE_LIST_HEX.split()
    )
    assert result.exit_code == 0
    assert (
        'Attribute(id=SDP_SERVICE_RECORD_HANDLE_ATTRIBUTE_ID,'
        'value=UNSIGNED_INTEGER(65537#4))'
    ) in result.output

    result = CliRunner().invoke(main, ['--attribute-list'] + ATTRIBUTE_LIST_HEX.split())
    assert result.exit_code == 0
    assert 'SDP_SERVICE_CLASS_ID_LIST_ATTRIBUTE_ID\n  SEQUENCE([' in result.output


# -----------------------------------------------------------------------------
def test_dump_files(tmp_path) -> None:
    binary_path = tmp_path / 'element.bin'
    binary_path.write_bytes(bytes([0x35, 0x03, 0x09, 0x01, 0x2C]))
    result = CliRunner().invoke(
        main, ['--format', 'binary', '--file', str(binary_path), '--compact']
    )
    assert result.exit_code == 0
    assert 'SEQUENCE([UNSIGNED_INTEGER(300#2)])' in result.output

    hex_path = tmp_path / 'element.txt'
    hex_path.write_text('35 03\n09 01 2C\n')
    result = CliRunner().invoke(main, ['--file', str(hex_path), '--compact'])
    assert result.exit_code == 0
    assert 'SEQUENCE([UNSIGNED_INTEGER(300#2)])' in result.output


# -----------------------------------------------------------------------------
def test_dump_rejects_invalid_elements() -> None:
    result = CliRunner().invoke(main, ['0901'])
    assert result.exit_code == 1
    assert 'TruncatedInputError' in result.output

    result = CliRunner().invoke(main, ['--max-depth', '1', '3502', '3500'])
    assert result.exit_code == 1
    assert 'MaxDepthExceededError' in result.output

    result = CliRunner().invoke(main, ['2802'])
    assert result.exit_code == 1
    assert 'InvalidBooleanValueError' in result.output


# -----------------------------------------------------------------------------
def test_dump_usage_errors() -> None:
    assert CliRunner().invoke(main, []).exit_code == 2
    assert CliRunner().invoke(main, ['zz']).exit_code == 2
    assert CliRunner().invoke(main, ['--format', 'binary', '00']).exit_code == 2


# -----------------------------------------------------------------------------
def test_dump_max_depth_bounds() -> None:
    data = bytes([0x35, 0x00])
    for _ in range(99):
        data = bytes([0x37]) + len(data).to_bytes(4, 'big') + data

    result = CliRunner().invoke(main, ['--max-depth', '5000', data.hex()])
    assert result.exit_code == 2
    assert CliRunner().invoke(main, ['--max-depth', '-1', '00']).exit_code == 2

    result = CliRunner().invoke(main, ['--max-depth', '64', data.hex()])
    assert result.exit_code == 1
    assert 'MaxDepthExceededError' in result.output
