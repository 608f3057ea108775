#!/usr/bin/env python3
"""
EDI Compare

A CLI tool for structural comparison of X12 and EDIFACT interchanges.

Usage:
    python -m edicompare.main segments <file>              List parsed segments
    python -m edicompare.main compare <left> <right>       Show aligned segments
    python -m edicompare.main summary <left> <right>       Show change counts
    python -m edicompare.main report <left> <right>        Write a text report

Supported Dialects:
    - X12: delimiters read from the ISA header (defaults * and ~)
    - EDIFACT: delimiters read from the UNA advice (defaults + : ? ')
"""

import argparse
import logging
import sys

from edicompare.diff import (
    DEFAULT_CONTEXT_SIZE,
    PresentOptions,
    align,
    default_pinned_ids,
    present,
    render_rows,
    summarize,
    write_report,
)
from edicompare.segments import (
    DEFAULT_MAX_COMPARISON_CELLS,
    check_comparison_size,
    ensure_comparable,
    load_document,
)

# Largest document (in segments) compared without --max-segments
DEFAULT_MAX_SEGMENTS = 20_000

DIALECT_CHOICES = ["auto", "x12", "edifact"]


def truncate(text: str, max_len: int = 50) -> str:
    """Truncate text with ellipsis."""
    if len(text) <= max_len:
        return text
    return text[:max_len - 3] + "..."


def load_pair(args):
    """Load and validate the two documents named on the command line."""
    left = load_document(args.left, args.input_dialect)
    right = load_document(args.right, args.input_dialect)
    ensure_comparable(left, right)

    for document in (left, right):
        if len(document) > args.max_segments:
            raise ValueError(
                f"{document.source} has {len(document):,} segments "
                f"(limit {args.max_segments:,}); raise --max-segments to compare it"
            )
    check_comparison_size(left, right, args.max_cells)
    return left, right


def build_options(args, dialect: str) -> PresentOptions:
    """Build presentation options from command line flags."""
    pinned = set() if args.no_default_pins else set(default_pinned_ids(dialect))
    pinned.update(args.pin or [])
    return PresentOptions(
        type_filter=args.type,
        diffs_only=args.diffs_only,
        pinned_ids=frozenset(pinned),
        context_size=args.context,
    )


# ============== Commands ==============

def cmd_segments(args):
    """List the segments of one document."""
    document = load_document(args.file, args.input_dialect)
    print(f"{args.file}: {document.dialect} ({len(document):,} segments)")

    header = f"{'LINE':<6} {'ID':<5} {'ELEMS':<6} {'RAW'}"
    print("-" * 60)
    print(header)
    print("-" * 60)

    count = 0
    for segment in document.segments:
        if args.type and segment.id != args.type:
            continue
        print(f"{segment.line_number:<6} {segment.id:<5} {len(segment.elements) - 1:<6} "
              f"{truncate(segment.raw.strip(), 60)}")
        count += 1
        if args.limit and count >= args.limit:
            print(f"\n... (limited to {args.limit} segments)")
            break

    print("-" * 60)
    print(f"Displayed {count} segments")


def cmd_compare(args):
    """Print the aligned rows of two documents."""
    left, right = load_pair(args)
    result = align(left.segments, right.segments)
    rows = present(result, build_options(args, left.dialect))

    print(f"--- {args.left}")
    print(f"+++ {args.right}")
    if rows:
        print(render_rows(rows, left.delimiters.element))
    elif args.type:
        print(f"(no {args.type} segments)")

    summary = summarize(result)
    print("-" * 60)
    print(f"+{summary.added} -{summary.removed} ~{summary.modified}  {summary.describe()}")


def cmd_summary(args):
    """Print change counts for two documents."""
    left, right = load_pair(args)
    summary = summarize(align(left.segments, right.segments))

    print("=" * 60)
    print("COMPARISON SUMMARY")
    print("=" * 60)
    print(f"  Left:       {args.left} ({len(left):,} segments)")
    print(f"  Right:      {args.right} ({len(right):,} segments)")
    print(f"  Dialect:    {left.dialect}")
    print()
    print(f"  Added:      {summary.added:,}")
    print(f"  Removed:    {summary.removed:,}")
    print(f"  Modified:   {summary.modified:,}")
    print(f"  Unchanged:  {summary.unchanged:,}")
    print(f"  Score:      {summary.score}")
    print()
    print(f"  {summary.describe()}")
    print("=" * 60)


def cmd_report(args):
    """Write a plain-text comparison report."""
    left, right = load_pair(args)
    result = align(left.segments, right.segments)
    output_path = write_report(
        result, args.output_dir, args.left, args.right, separator=left.delimiters.element
    )
    print(f"Report written to {output_path}")


def add_pair_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by commands that compare two documents."""
    parser.add_argument('left', help='Left (original) interchange file')
    parser.add_argument('right', help='Right (revised) interchange file')
    parser.add_argument(
        '--input-dialect',
        choices=DIALECT_CHOICES,
        default='auto',
        help='Interchange dialect (default: auto-detect)'
    )
    parser.add_argument(
        '--max-segments',
        type=int,
        default=DEFAULT_MAX_SEGMENTS,
        help=f'Refuse documents with more segments (default: {DEFAULT_MAX_SEGMENTS:,})'
    )
    parser.add_argument(
        '--max-cells',
        type=int,
        default=DEFAULT_MAX_COMPARISON_CELLS,
        help='Refuse pairs whose alignment table (left x right segments) is larger '
        f'(default: {DEFAULT_MAX_COMPARISON_CELLS:,})'
    )


def main():
    parser = argparse.ArgumentParser(
        description="EDI Compare - structural diff for X12 and EDIFACT interchanges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Segments command
    segments_parser = subparsers.add_parser('segments', help='List parsed segments')
    segments_parser.add_argument('file', help='Interchange file path')
    segments_parser.add_argument('-n', '--limit', type=int, help='Limit number of segments')
    segments_parser.add_argument('--type', help='Only show segments with this id')
    segments_parser.add_argument(
        '--input-dialect',
        choices=DIALECT_CHOICES,
        default='auto',
        help='Interchange dialect (default: auto-detect)'
    )
    segments_parser.set_defaults(func=cmd_segments)

    # Compare command
    compare_parser = subparsers.add_parser('compare', help='Show aligned segments')
    add_pair_arguments(compare_parser)
    compare_parser.add_argument('-d', '--diffs-only', action='store_true',
                                help='Collapse unchanged segments outside the context')
    compare_parser.add_argument('--type', help='Only show segments with this id')
    compare_parser.add_argument('--pin', action='append', metavar='ID',
                                help='Always show segments with this id (repeatable)')
    compare_parser.add_argument('--no-default-pins', action='store_true',
                                help='Do not pin envelope/header segments')
    compare_parser.add_argument(
        '-C', '--context',
        type=int,
        default=DEFAULT_CONTEXT_SIZE,
        help=f'Context segments around each change (default: {DEFAULT_CONTEXT_SIZE})'
    )
    compare_parser.set_defaults(func=cmd_compare)

    # Summary command
    summary_parser = subparsers.add_parser('summary', help='Show change counts')
    add_pair_arguments(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    # Report command
    report_parser = subparsers.add_parser('report', help='Write a text report')
    add_pair_arguments(report_parser)
    report_parser.add_argument(
        '-O', '--output-dir',
        default='reports',
        help='Output directory for the report (default: reports)'
    )
    report_parser.set_defaults(func=cmd_report)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
