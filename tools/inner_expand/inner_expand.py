#!/usr/bin/env python3
"""Command-line tool that prints the Python an Inner directive expands to."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from inner import Inner, InnerConfig, InnerError  # noqa: E402
from inner.inner_parser import InnerParser  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the inner_expand CLI."""
    parser = argparse.ArgumentParser(
        description='Show the Python code generated for an Inner directive',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Expand a full directive
  inner_expand 'inner!(x, if Fruit.Apple, else |e| { 0 })'

  # Expand an argument list for a given directive form
  inner_expand --directive ok 'fruit, if Fruit.Apple, or |e| e + 70'

  # Read the invocation from stdin
  echo 'some!(x)' | inner_expand -
"""
    )
    parser.add_argument(
        'invocation',
        help='Directive or argument list (use "-" for stdin)'
    )
    parser.add_argument(
        '-d', '--directive',
        choices=['inner', 'some', 'ok'],
        help='Directive form for a bare argument list (default: parse "name!(...)")'
    )
    parser.add_argument(
        '-c', '--config',
        help='YAML configuration file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log compiler activity to stderr'
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

    text = sys.stdin.read() if args.invocation == '-' else args.invocation

    try:
        config = InnerConfig.load_from_file(args.config) if args.config else InnerConfig()
        inner = Inner(config)

        if args.directive:
            source = inner.expand(args.directive, text)

        else:
            directive, arguments = InnerParser.split_directive(text)
            source = inner.expand(directive, arguments)

    except (InnerError, OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error expanding directive: {e}", file=sys.stderr)
        return 1

    print(source, end='')
    return 0


if __name__ == '__main__':
    sys.exit(main())
