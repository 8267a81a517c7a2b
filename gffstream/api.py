"""
Convenience wrappers around GFF3Parser for common input shapes.
"""

import re
from collections import deque
from typing import Iterable, Iterator, List, Optional, Sequence

from gffstream.config import ParserConfig
from gffstream.models import Feature, LineRecord
from gffstream.parsers.gff3_parser import GFF3Parser
from gffstream.parsers.records import decode_fields

NEWLINE_REGEX = re.compile(r'\r?\n')


def _make_parser(items, parse_all=False, buffer_size=None,
                 disable_derives_from_references=False) -> GFF3Parser:
    config = ParserConfig(
        buffer_size=buffer_size,
        disable_derives_from_references=disable_derives_from_references,
    )
    callbacks = {'feature_callback': items.append}
    if parse_all:
        callbacks.update(
            comment_callback=items.append,
            directive_callback=items.append,
            sequence_callback=items.append,
        )
    return GFF3Parser(config, **callbacks)


def parse_lines(lines: Iterable[str], parse_all: bool = False, **options) -> List:
    """
    Parse GFF3 lines and return the completed items in emission order.

    Args:
        lines: GFF3 text lines, with or without line terminators
        parse_all: Also return directives, comments and FASTA sequences
        **options: buffer_size, disable_derives_from_references

    Returns:
        List of Feature objects (plus other items when parse_all is set)
    """
    items = []
    parser = _make_parser(items, parse_all, **options)
    for line in lines:
        parser.add_line(line)
    parser.finish()
    return items


def parse_string(text: str, parse_all: bool = False, **options) -> List:
    """Parse a string holding a whole GFF3 document."""
    return parse_lines(NEWLINE_REGEX.split(text), parse_all, **options)


def parse_fields(rows: Iterable[Sequence[Optional[str]]], unescape_values: bool = True,
                 **options) -> List[Feature]:
    """Parse feature lines already split into their 9 columns."""
    features: List[Feature] = []
    parser = _make_parser(features, **options)
    for row in rows:
        parser.add_parsed_feature_line(decode_fields(row, unescape_values))
    parser.finish()
    return features


def parse_records(records: Iterable[LineRecord], **options) -> List[Feature]:
    """Parse LineRecord objects, using the fast path where has_escapes is False."""
    features: List[Feature] = []
    parser = _make_parser(features, **options)
    for record in records:
        parser.add_record(record)
    parser.finish()
    return features


def iter_features(lines: Iterable[str], **options) -> Iterator[Feature]:
    """Yield features as soon as they are complete while reading lines."""
    pending = deque()
    parser = _make_parser(pending, **options)
    for line in lines:
        parser.add_line(line)
        while pending:
            yield pending.popleft()
    parser.finish()
    while pending:
        yield pending.popleft()
