#!/usr/bin/env python3
"""
PlantUML command-line renderer.

Renders, validates, encodes and decodes PlantUML diagrams without going
through the HTTP service.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .encoding import decode, encode
from .errors import DiagramError, InvalidSourceText
from .executor import PlantUMLExecutor
from .formats import DiagramFormat


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="plantuml-render",
        description="Render PlantUML diagrams through the PlantUML engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  plantuml-render render diagram.puml -f svg -o diagram.svg
  cat diagram.puml | plantuml-render validate
  plantuml-render encode diagram.puml | xargs plantuml-render decode
        """
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    render = subparsers.add_parser('render', help='Render a diagram')
    render.add_argument('input_file', nargs='?', help='PlantUML source file (default: stdin)')
    render.add_argument(
        '--format', '-f',
        choices=[f.value for f in DiagramFormat],
        default=DiagramFormat.SVG.value,
        help='Output format'
    )
    render.add_argument('--output', '-o', help='Output file (default: stdout)')

    validate = subparsers.add_parser('validate', help='Check diagram syntax')
    validate.add_argument('input_file', nargs='?', help='PlantUML source file (default: stdin)')

    decode_cmd = subparsers.add_parser('decode', help='Decode a PlantUML URL token')
    decode_cmd.add_argument('token', help='Encoded diagram')

    encode_cmd = subparsers.add_parser('encode', help='Encode a diagram as a URL token')
    encode_cmd.add_argument('input_file', nargs='?', help='PlantUML source file (default: stdin)')

    return parser.parse_args(argv)


def read_source(input_file: Optional[str]) -> str:
    """Read diagram source from a file, or stdin when no file is given."""
    raw = Path(input_file).read_bytes() if input_file else sys.stdin.buffer.read()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidSourceText(e) from e


def run_command(args: argparse.Namespace) -> None:
    if args.command == 'decode':
        print(decode(args.token))
    elif args.command == 'encode':
        print(encode(read_source(args.input_file)))
    elif args.command == 'validate':
        print(PlantUMLExecutor().validate(read_source(args.input_file)))
    else:
        result = PlantUMLExecutor().generate(
            read_source(args.input_file), DiagramFormat(args.format)
        )
        if args.output:
            Path(args.output).write_bytes(result.content)
            if args.verbose:
                print(f"Wrote {len(result.content)} bytes to {args.output}", file=sys.stderr)
        else:
            sys.stdout.buffer.write(result.content)
            sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_command(args)
    except DiagramError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.diagnostic:
            print(e.diagnostic, file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
