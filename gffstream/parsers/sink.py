"""
Callback boundary through which parsed items leave the parser.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from Bio.SeqRecord import SeqRecord

from gffstream.models import Comment, Directive, Feature


@dataclass
class EmissionSink:
    """Optional handler per item kind; a missing handler is simply not called."""
    feature_callback: Optional[Callable[[Feature], Any]] = None
    comment_callback: Optional[Callable[[Comment], Any]] = None
    directive_callback: Optional[Callable[[Directive], Any]] = None
    sequence_callback: Optional[Callable[[SeqRecord], Any]] = None
    end_callback: Optional[Callable[[], Any]] = None
    error_callback: Optional[Callable[[Exception], Any]] = None
    emitted: Counter = field(default_factory=Counter)

    def emit(self, item) -> None:
        if isinstance(item, Feature):
            kind, handler = 'feature', self.feature_callback
        elif isinstance(item, Directive):
            kind, handler = 'directive', self.directive_callback
        elif isinstance(item, Comment):
            kind, handler = 'comment', self.comment_callback
        elif isinstance(item, SeqRecord):
            kind, handler = 'sequence', self.sequence_callback
        else:
            raise TypeError(f"Cannot emit item of type {type(item).__name__}")

        self.emitted[kind] += 1
        if handler is not None:
            handler(item)

    def end(self) -> None:
        if self.end_callback is not None:
            self.end_callback()
