"""
gffstream - streaming GFF3 parser with incremental reference resolution.
"""

__version__ = "0.1.0"

from gffstream.config import ParserConfig
from gffstream.errors import (
    GFF3Error,
    MalformedLineError,
    StructuralError,
    UnresolvedReferenceError,
)
from gffstream.models import Comment, Directive, Feature, FeatureLine, LineRecord
from gffstream.parsers import GFF3Parser
from gffstream.api import (
    iter_features,
    parse_fields,
    parse_lines,
    parse_records,
    parse_string,
)
