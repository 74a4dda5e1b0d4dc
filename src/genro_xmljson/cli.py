# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Command line converter between JSON and XML.

Usage:
    # JSON file to XML on stdout
    genro-xmljson to-xml data.json

    # XML from stdin to JSON file
    cat data.xml | genro-xmljson to-json -o data.json

    # Without type hints, custom root tag, repeated <item> siblings
    genro-xmljson to-xml data.json --no-hints --root-name catalog --expand item
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .exceptions import XmlJsonException
from .serializer import XmlJsonSerializer
from .values import dump_json, parse_json


def _read_input(path: Path | None) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    return path.read_bytes()


def _write_output(path: Path | None, text: str, encoding: str = 'UTF-8') -> None:
    if path is None:
        sys.stdout.write(text)
        if not text.endswith('\n'):
            sys.stdout.write('\n')
        return
    path.write_bytes(text.encode(encoding))


def _to_xml(args: argparse.Namespace) -> None:
    serializer = XmlJsonSerializer(
        type_hints_enabled=not args.no_hints,
        root_name=args.root_name,
        object_name=args.object_name,
        array_name=args.array_name,
        element_name=args.element_name,
        expandable_properties=frozenset(args.expand or ()),
    )
    value = parse_json(_read_input(args.input))
    _write_output(args.output, serializer.write(value, encoding=args.encoding), args.encoding or 'UTF-8')


def _to_json(args: argparse.Namespace) -> None:
    serializer = XmlJsonSerializer(
        skip_namespaces=args.skip_namespaces,
        trim_spaces=args.trim_spaces,
        remove_namespace_prefix_from_elements=args.remove_namespace_prefix,
    )
    value = serializer.read(_read_input(args.input))
    _write_output(args.output, dump_json(value))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='genro-xmljson',
        description='Convert between JSON and XML',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log conversion details to stderr'
    )
    commands = parser.add_subparsers(dest='command', required=True)

    to_xml = commands.add_parser('to-xml', help='Convert JSON to XML')
    to_xml.add_argument('input', nargs='?', type=Path, help='JSON file (default: stdin)')
    to_xml.add_argument('-o', '--output', type=Path, help='XML file (default: stdout)')
    to_xml.add_argument('--encoding', help='Output encoding (default: UTF-8)')
    to_xml.add_argument('--no-hints', action='store_true', help='Do not write type/class hints')
    to_xml.add_argument('--root-name', help='Tag of the root element')
    to_xml.add_argument('--object-name', default='o', help="Tag of object containers (default: 'o')")
    to_xml.add_argument('--array-name', default='a', help="Tag of array containers (default: 'a')")
    to_xml.add_argument('--element-name', default='e', help="Tag of array items (default: 'e')")
    to_xml.add_argument(
        '--expand',
        nargs='+',
        metavar='NAME',
        help='Members always written as repeated sibling elements'
    )
    to_xml.set_defaults(func=_to_xml)

    to_json = commands.add_parser('to-json', help='Convert XML to JSON')
    to_json.add_argument('input', nargs='?', type=Path, help='XML file (default: stdin)')
    to_json.add_argument('-o', '--output', type=Path, help='JSON file (default: stdout)')
    to_json.add_argument('--skip-namespaces', action='store_true', help='Omit @xmlns members')
    to_json.add_argument('--trim-spaces', action='store_true', help='Trim text values')
    to_json.add_argument(
        '--remove-namespace-prefix',
        action='store_true',
        help='Strip namespace prefixes from member names'
    )
    to_json.set_defaults(func=_to_json)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    try:
        args.func(args)
    except (XmlJsonException, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
