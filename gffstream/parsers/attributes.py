"""
Splitting, escaping and unescaping of the GFF3 attribute column.
"""

import re
from typing import Dict, List

ESCAPE_REGEX = re.compile(r'%([0-9A-Fa-f]{2})')
ATTRIBUTE_ESCAPE_REGEX = re.compile('[\n;\r\t=%&,\x00-\x1f\x7f-\xff]')
COLUMN_ESCAPE_REGEX = re.compile('[\n\r\t%\x00-\x1f\x7f-\xff]')
LINE_END_REGEX = re.compile(r'\r?\n$')


def unescape(value: str) -> str:
    """Replace %XX sequences with the character they encode."""
    if '%' not in value:
        return value
    return ESCAPE_REGEX.sub(lambda m: chr(int(m.group(1), 16)), value)


def _escape(regex, value) -> str:
    return regex.sub(lambda m: f"%{ord(m.group(0)):02X}", str(value))


def escape(value) -> str:
    """Escape a value for use inside the attribute column."""
    return _escape(ATTRIBUTE_ESCAPE_REGEX, value)


def escape_column(value) -> str:
    """Escape a value for use in columns 1-8."""
    return _escape(COLUMN_ESCAPE_REGEX, value)


def parse_attributes(attr_string: str, unescape_values: bool = True) -> Dict[str, List[str]]:
    """
    Parse the 9th column of a feature line into a mapping of tag to values.

    Args:
        attr_string: Raw attribute column, e.g. "ID=mRNA1;Parent=gene1,gene2"
        unescape_values: Decode %XX sequences in values; pass False when the
            caller knows the column contains no escapes

    Returns:
        Dict of tag to the ordered list of its values. Repeated tags
        accumulate into one list.
    """
    attrs: Dict[str, List[str]] = {}
    attr_string = LINE_END_REGEX.sub('', attr_string)
    if not attr_string or attr_string == '.':
        return attrs

    for record in attr_string.split(';'):
        if not record:
            continue
        tag, sep, raw_value = record.partition('=')
        tag = tag.strip()
        if not sep or not tag or not raw_value:
            continue

        for raw in raw_value.split(','):
            value = (unescape(raw) if unescape_values else raw).strip()
            if not value:
                continue
            attrs.setdefault(tag, []).append(value)

    return attrs
