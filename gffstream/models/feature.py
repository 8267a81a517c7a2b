"""
Data models for decoded GFF3 lines and the features built from them.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

ID = "ID"
PARENT = "Parent"
DERIVES_FROM = "Derives_from"


@dataclass
class FeatureLine:
    """One decoded row of a GFF3 file."""
    seq_id: Optional[str]
    source: Optional[str]
    type: Optional[str]
    start: Optional[int]
    end: Optional[int]
    score: Optional[float]
    strand: Optional[str]
    phase: Optional[str]
    attributes: Optional[Dict[str, List[str]]] = None
    child_features: List['Feature'] = field(default_factory=list, repr=False)
    derived_features: List['Feature'] = field(default_factory=list, repr=False)
    line_num: Optional[int] = field(default=None, compare=False)

    def get_attribute(self, tag: str) -> List[str]:
        """Return the values stored for tag, or an empty list."""
        if not self.attributes:
            return []
        return self.attributes.get(tag, [])

    def references(self, kind: str) -> List['Feature']:
        """Return the list that features referencing this line via kind are attached to."""
        if kind == PARENT:
            return self.child_features
        if kind == DERIVES_FROM:
            return self.derived_features
        raise ValueError(f"Unknown reference kind '{kind}'")


@dataclass
class Feature:
    """One or more lines sharing an ID, e.g. a discontinuous alignment."""
    id: Optional[str]
    lines: List[FeatureLine] = field(default_factory=list)

    @property
    def type(self) -> Optional[str]:
        return self.lines[0].type if self.lines else None

    def append(self, line: FeatureLine) -> None:
        self.lines.append(line)

    def __len__(self):
        return len(self.lines)

    def __iter__(self) -> Iterator[FeatureLine]:
        return iter(self.lines)

    def __getitem__(self, index):
        return self.lines[index]

    def iter_descendants(self) -> Iterator['Feature']:
        """Walk child and derived features depth-first, yielding each once."""
        seen = {id(self)}
        stack = [self]
        while stack:
            current = stack.pop()
            if current is not self:
                yield current
            pending = []
            for line in current.lines:
                for other in line.child_features + line.derived_features:
                    if id(other) not in seen:
                        seen.add(id(other))
                        pending.append(other)
            stack.extend(reversed(pending))


@dataclass
class Directive:
    """A '##' directive line."""
    directive: str
    value: Optional[str] = None


@dataclass
class SequenceRegionDirective(Directive):
    seq_id: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


@dataclass
class GenomeBuildDirective(Directive):
    source: Optional[str] = None
    build_name: Optional[str] = None


@dataclass
class Comment:
    """A '#' comment line."""
    comment: str


@dataclass
class LineRecord:
    """A raw feature line with caller-supplied metadata.

    has_escapes=False lets the decoder skip percent-unescaping. line_hash,
    when given, is carried through as the '_lineHash' attribute.
    """
    line: str
    line_hash: Optional[Union[str, int]] = None
    start: Optional[int] = None
    end: Optional[int] = None
    has_escapes: bool = True
