"""
Parser configuration.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ParserConfig:
    """Options recognised by the GFF3 parser.

    buffer_size caps the number of top-level features held while waiting
    for more references; None means unlimited. Features pushed out of the
    buffer are emitted early, so later references to them become orphans.
    """
    buffer_size: Optional[int] = None
    disable_derives_from_references: bool = False
    collect_sequences: bool = True

    def validate(self):
        if self.buffer_size is not None and self.buffer_size < 0:
            raise ValueError(f"buffer_size must be zero or positive, not {self.buffer_size}")
        return self
