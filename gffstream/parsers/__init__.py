"""
Parsers for GFF3 lines, attributes and feature references.
"""

from gffstream.parsers.attributes import escape, escape_column, parse_attributes, unescape
from gffstream.parsers.records import decode_fields, decode_line, parse_directive
from gffstream.parsers.resolver import ReferenceResolver
from gffstream.parsers.sink import EmissionSink
from gffstream.parsers.gff3_parser import GFF3Parser
