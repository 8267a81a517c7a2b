"""
Data models for GFF3 features, directives and comments.
"""

from gffstream.models.feature import (
    ID,
    PARENT,
    DERIVES_FROM,
    FeatureLine,
    Feature,
    Directive,
    SequenceRegionDirective,
    GenomeBuildDirective,
    Comment,
    LineRecord,
)
