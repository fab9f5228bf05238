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
import sys

import click

import sdpdecoder.logging
from sdpdecoder.core import DataElementError
from sdpdecoder.sdp import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    DataElement,
    ServiceAttribute,
)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
def load_input(data, filename, format):
    # pylint: disable=redefined-builtin
    if filename:
        with open(filename, 'rb') as input:
            content = input.read()
        if format == 'binary':
            return content
        text = content.decode('ascii', errors='replace')
    else:
        if format == 'binary':
            raise click.UsageError('binary input must be read from a file')
        text = ''.join(data)

    hex_string = ''.join(text.split()).replace(':', '')
    try:
        return bytes.fromhex(hex_string)
    except ValueError as error:
        raise click.BadParameter(f'invalid hex input: {error}') from error


# -----------------------------------------------------------------------------
def print_element(element, pretty, attribute_list):
    if attribute_list and element.kind == DataElement.SEQUENCE:
        for attribute in ServiceAttribute.list_from_data_element(element):
            if pretty:
                click.echo(click.style(attribute.id_name(attribute.id), fg='magenta'))
                click.echo(attribute.value.to_string(pretty=True, indentation=1))
            else:
                click.echo(attribute.to_string(with_colors=True))
        return

    click.echo(element.to_string(pretty=pretty))


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------
@click.command()
@click.option(
    '--format',
    type=click.Choice(['hex', 'binary']),
    default='hex',
    help='Format of the input',
)
@click.option(
    '--file',
    'filename',
    metavar='FILENAME',
    type=click.Path(exists=True, dir_okay=False),
    help='Read the input from a file instead of the command line',
)
@click.option(
    '--multiple',
    is_flag=True,
    help='The input is a concatenation of elements, decode all of them',
)
@click.option(
    '--attribute-list',
    is_flag=True,
    help='Show top-level sequences as attribute ID/value pairs',
)
@click.option('--pretty/--compact', default=True, help='Output layout')
@click.option(
    '--max-depth',
    metavar='DEPTH',
    type=click.IntRange(min=0, max=MAX_DEPTH_LIMIT),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help='Maximum nesting of sequences and alternatives',
)
@click.argument('data', nargs=-1)
# pylint: disable=redefined-builtin
def main(format, filename, multiple, attribute_list, pretty, max_depth, data):
    sdpdecoder.logging.setup_basic_logging('WARNING')

    if not data and not filename:
        raise click.UsageError('no input (pass hex bytes or --file)')

    payload = load_input(data, filename, format)
    logger.debug(f'decoding {len(payload)} bytes')

    try:
        if multiple:
            elements = DataElement.list_from_bytes(payload, max_depth)
        else:
            elements = [DataElement.from_bytes(payload, max_depth)]
    except DataElementError as error:
        logger.warning(f'rejecting input: {error}')
        click.echo(click.style(f'!!! {type(error).__name__}: {error}', fg='red'))
        sys.exit(1)

    if not multiple and elements[0].encoded_size < len(payload):
        logger.warning(
            f'{len(payload) - elements[0].encoded_size} trailing bytes not decoded'
        )

    for element in elements:
        print_element(element, pretty, attribute_list)


# -----------------------------------------------------------------------------
if __name__ == '__main__':
    main()  # pylint: disable=no-value-for-parameter
