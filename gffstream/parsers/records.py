"""
Decoding of GFF3 feature lines and directives.
"""

import re
from typing import List, Optional, Sequence

from gffstream.errors import MalformedLineError
from gffstream.models import (
    Directive,
    FeatureLine,
    GenomeBuildDirective,
    SequenceRegionDirective,
)
from gffstream.parsers.attributes import parse_attributes, unescape

DIRECTIVE_REGEX = re.compile(r'^\s*##\s*(\S+)\s*(.*)')
LINE_END_REGEX = re.compile(r'\r?\n$')
WHITESPACE_REGEX = re.compile(r'\s+')
NON_DIGIT_REGEX = re.compile(r'\D')

COLUMNS = ['seq_id', 'source', 'type', 'start', 'end', 'score', 'strand', 'phase', 'attributes']


def _is_empty(value) -> bool:
    return value is None or value == '' or value == '.'


def _text(value, unescape_values):
    if _is_empty(value):
        return None
    return unescape(value) if unescape_values else value


def _cannot_parse(line, reason):
    return MalformedLineError(f"GFF3 parse error.  Cannot parse '{line}': {reason}", line=line)


def _number(value, column, convert, line):
    if _is_empty(value):
        return None
    try:
        return convert(value)
    except ValueError:
        raise _cannot_parse(line, f"{column} value '{value}' is not numeric")


def decode_fields(fields: Sequence[Optional[str]], unescape_values: bool = True,
                  line_num: Optional[int] = None, line: Optional[str] = None) -> FeatureLine:
    """
    Build a FeatureLine from the 9 columns of a feature line.

    '.' and empty columns become None. The first three columns and attribute
    values are percent-unescaped unless unescape_values is False.
    """
    if line is None:
        line = '\t'.join('' if f is None else str(f) for f in fields)
    if len(fields) != len(COLUMNS):
        raise _cannot_parse(line, f"expected {len(COLUMNS)} tab-separated columns, found {len(fields)}")
    seq_id, source, ftype, start, end, score, strand, phase, attr_string = fields

    return FeatureLine(
        seq_id=_text(seq_id, unescape_values),
        source=_text(source, unescape_values),
        type=_text(ftype, unescape_values),
        start=_number(start, 'start', int, line),
        end=_number(end, 'end', int, line),
        score=_number(score, 'score', float, line),
        strand=None if _is_empty(strand) else strand,
        phase=None if _is_empty(phase) else phase,
        attributes=None if _is_empty(attr_string) else parse_attributes(attr_string, unescape_values),
        line_num=line_num,
    )


def decode_line(line: str, unescape_values: bool = True, line_num: Optional[int] = None) -> FeatureLine:
    """Decode one tab-delimited feature line."""
    stripped = LINE_END_REGEX.sub('', line)
    return decode_fields(stripped.split('\t'), unescape_values, line_num=line_num, line=stripped)


def parse_directive(line: str) -> Optional[Directive]:
    """Parse a '##' directive line, or return None if the line is not one."""
    match = DIRECTIVE_REGEX.match(line)
    if not match:
        return None

    name, contents = match.group(1), match.group(2)
    contents = contents.rstrip('\r\n')
    value = contents if contents else None

    if name == 'sequence-region':
        parts: List[Optional[str]] = WHITESPACE_REGEX.split(contents, 2) if contents else []
        parts += [None] * (3 - len(parts))
        seq_id, start, end = parts[:3]
        return SequenceRegionDirective(
            directive=name,
            value=value,
            seq_id=seq_id,
            start=NON_DIGIT_REGEX.sub('', start) if start is not None else None,
            end=NON_DIGIT_REGEX.sub('', end) if end is not None else None,
        )
    if name == 'genome-build':
        parts = WHITESPACE_REGEX.split(contents, 1) if contents else []
        parts += [None] * (2 - len(parts))
        return GenomeBuildDirective(directive=name, value=value, source=parts[0], build_name=parts[1])

    return Directive(directive=name, value=value)
