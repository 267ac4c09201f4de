#!/usr/bin/env python
"""Validate a mind map document and print it as an indented outline.

Usage:
    # Built-in seed, initial collapse applied (what the UI shows on load)
    python scripts/print_outline.py

    # A document on disk, everything including collapsed subtrees
    python scripts/print_outline.py mindmap_data.json --all

    # Re-export after loading (normalizes the document)
    python scripts/print_outline.py mindmap_data.json --export normalized.json
"""

import argparse
import logging
import sys

# Add src to path
sys.path.insert(0, "src")

from mycelium.errors import MalformedDocumentError
from mycelium.models import Node
from mycelium.storage import load_document, read_document, seed_document, write_document
from mycelium.tree import collapse_below_root, count_nodes

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Print a mind map document as an outline"
    )
    parser.add_argument(
        "document",
        nargs="?",
        help="JSON document (built-in seed if omitted)",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Also print collapsed subtrees",
    )
    parser.add_argument(
        "--no-collapse",
        action="store_true",
        help="Skip the initial collapse below level 1",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        help="Write the loaded tree back out as a document",
    )
    return parser.parse_args()


def outline_lines(root: Node, show_hidden: bool) -> list[str]:
    """One line per node: marker, label, id and status."""
    lines = []
    stack: list[tuple[Node, int, bool]] = [(root, 0, False)]
    while stack:
        node, depth, hidden = stack.pop()
        if node.collapsed:
            marker = "+"
        elif node.has_children:
            marker = "-"
        else:
            marker = " "
        suffix = " (hidden)" if hidden else ""
        lines.append(
            f"{'  ' * depth}{marker} {node.label} [{node.id}] {node.metadata.status}{suffix}"
        )

        kids = [(c, depth + 1, hidden) for c in node.children or []]
        if show_hidden:
            kids += [(c, depth + 1, True) for c in node.hidden_children or []]
        stack.extend(reversed(kids))
    return lines


def main() -> int:
    args = parse_args()

    try:
        tree = read_document(args.document) if args.document else load_document(seed_document())
    except MalformedDocumentError as e:
        logger.error(f"Invalid document: {e}")
        return 1

    if not args.no_collapse:
        tree = collapse_below_root(tree)

    print("\n".join(outline_lines(tree, show_hidden=args.all)))
    print(f"\n{count_nodes(tree)} nodes")

    if args.export:
        write_document(tree, args.export)

    return 0


if __name__ == "__main__":
    sys.exit(main())
