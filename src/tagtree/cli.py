"""
CLI interface for tagtree.

Pipe-friendly: reads a document from a file or stdin, applies the edit flags
in the order given, prints the serialized tree.

    tagtree page.html --bold-row 2 --remove ul --add-tag world em
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import get_config
from .dom import StructuralError
from .tree import Tree


class EditAction(argparse.Action):
    """Collect edit flags into one ordered list of (operation, args)."""

    def __call__(self, parser, namespace, values, option_string=None):
        edits = list(getattr(namespace, self.dest, None) or [])
        if not isinstance(values, list):
            values = [values]
        edits.append((self.const, values))
        setattr(namespace, self.dest, edits)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="tagtree",
        description="Structural edits on a one-tag-per-line HTML document",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input file (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--replace",
        nargs=2,
        metavar=("OLD", "NEW"),
        action=EditAction,
        const="replace_tag",
        dest="edits",
        help="Rename every OLD tag to NEW",
    )

    parser.add_argument(
        "--bold-row",
        type=int,
        metavar="N",
        action=EditAction,
        const="bold_row",
        dest="edits",
        help="Boldface every cell of table row N (first row is 1)",
    )

    parser.add_argument(
        "--remove",
        metavar="TAG",
        action=EditAction,
        const="remove_tag",
        dest="edits",
        help="Remove every TAG, keeping its contents (li under ul/ol become p)",
    )

    parser.add_argument(
        "--add-tag",
        nargs=2,
        metavar=("WORD", "TAG"),
        action=EditAction,
        const="add_tag",
        dest="edits",
        help="Wrap every occurrence of WORD in a TAG element",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write the result here instead of stdout",
    )

    parser.add_argument(
        "--encoding",
        type=str,
        help="Input/output encoding (default from config, utf-8)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log every edit to stderr",
    )

    parsed = parser.parse_args(args)
    if parsed.edits is None:
        parsed.edits = []
    return parsed


def read_input(filepath: str | None, encoding: str) -> str:
    """Read from file or stdin."""
    if filepath:
        with open(filepath, encoding=encoding) as f:
            return f.read()
    return sys.stdin.read()


def apply_edits(tree: Tree, edits: list[tuple[str, list]]) -> None:
    """Run each (operation, args) pair against the tree, in order."""
    for operation, values in edits:
        getattr(tree, operation)(*values)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_config().logging.level
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    setup_logging(parsed.verbose)
    encoding = parsed.encoding or get_config().io.encoding

    # Read content
    try:
        content = read_input(parsed.file, encoding)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError, LookupError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    tree = Tree.from_text(content)
    try:
        tree.build()
    except StructuralError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    apply_edits(tree, parsed.edits)
    output = tree.get_html()

    if parsed.output:
        try:
            with open(parsed.output, "w", encoding=encoding) as f:
                f.write(output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        return 0

    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
