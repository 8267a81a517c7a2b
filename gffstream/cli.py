#!/usr/bin/env python3
"""
gffstream - command-line summary of a GFF3 file.
"""

import argparse
import gzip
import logging
import os
import sys

from gffstream.config import ParserConfig
from gffstream.errors import GFF3Error
from gffstream.parsers.gff3_parser import GFF3Parser
from gffstream.reporting.text_report import FeatureSummary, generate_summary_report
from gffstream.utils.logging import setup_logging


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description='Parse a GFF3 file and summarise its feature structure.')
    parser.add_argument('gff_file', help='Input GFF3 file (may be gzipped)')

    output_group = parser.add_argument_group('Output Options')
    output_group.add_argument('--output', '-o', help='Output file (default: stdout)')

    parse_group = parser.add_argument_group('Parsing Options')
    parse_group.add_argument('--buffer-size', type=int, default=None,
                             help='Maximum number of top-level features held in memory (default: unlimited)')
    parse_group.add_argument('--disable-derives-from', action='store_true',
                             help='Ignore Derives_from attributes when linking features')
    parse_group.add_argument('--no-sequences', action='store_true',
                             help='Skip the ##FASTA section instead of reading its sequences')

    debug_group = parser.add_argument_group('Debug Options')
    debug_group.add_argument('--debug', action='store_true', help='Enable debug output')
    debug_group.add_argument('--verbose', action='store_true', help='Enable verbose output without full debug')
    debug_group.add_argument('--log-file', help='Write log to this file')

    return parser.parse_args(argv)


def open_gff(path):
    if path.endswith('.gz'):
        return gzip.open(path, 'rt')
    return open(path, 'r')


def main(args=None):
    """Parse the input file and write the summary report."""
    if args is None:
        args = parse_args()

    setup_logging(debug=args.debug, log_file=args.log_file, verbose=args.verbose)

    if not os.path.exists(args.gff_file):
        logging.error(f"Input file not found: {args.gff_file}")
        return 1

    try:
        config = ParserConfig(
            buffer_size=args.buffer_size,
            disable_derives_from_references=args.disable_derives_from,
            collect_sequences=not args.no_sequences,
        ).validate()
    except ValueError as e:
        logging.error(str(e))
        return 1

    summary = FeatureSummary()
    parser = GFF3Parser(config, **summary.callbacks())

    logging.info(f"Parsing GFF3 file: {args.gff_file}")
    try:
        with open_gff(args.gff_file) as f:
            for line in f:
                parser.add_line(line)
        parser.finish()
    except GFF3Error as e:
        logging.error(f"Error parsing {args.gff_file}: {e}")
        return 1

    logging.info(f"Finished parsing GFF3: {parser.line_number} lines")
    generate_summary_report(summary, args.output, title=os.path.basename(args.gff_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
