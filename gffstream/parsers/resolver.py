"""
Incremental resolution of Parent and Derives_from references.

Feature lines arrive one at a time in file order. The resolver keeps
features that may still gain children or derived features, links
references in both directions (child before parent and parent before
child), merges lines sharing an ID into one feature, and hands finished
top-level features to the emission sink.
"""

import logging
from collections import OrderedDict, defaultdict
from typing import Dict, List, Optional, Set, Tuple

from gffstream.errors import StructuralError, UnresolvedReferenceError
from gffstream.models import DERIVES_FROM, ID, PARENT, Feature, FeatureLine
from gffstream.parsers.sink import EmissionSink

REFERENCE_KINDS = (PARENT, DERIVES_FROM)


class ReferenceResolver:
    """State machine linking features to their parents and origins."""

    def __init__(self, sink: EmissionSink, buffer_size: Optional[int] = None,
                 disable_derives_from_references: bool = False):
        self.sink = sink
        self.buffer_size = buffer_size
        self.disable_derives_from_references = disable_derives_from_references

        # features with no outward reference, in first-seen order, keyed by ID
        self._top_level: "OrderedDict[str, Feature]" = OrderedDict()
        # every feature still under construction, by ID
        self._by_id: Dict[str, Feature] = {}
        # referencing ID -> {(kind, target ID)} already linked or queued
        self._completed_references: Dict[str, Set[Tuple[str, str]]] = defaultdict(set)
        # target ID -> {kind: [features waiting for it]}
        self._orphans: Dict[str, Dict[str, List[Feature]]] = {}

    @property
    def pending_ids(self) -> List[str]:
        return list(self._by_id)

    @property
    def orphan_ids(self) -> List[str]:
        return list(self._orphans)

    @property
    def top_level_count(self) -> int:
        return len(self._top_level)

    def add(self, line: FeatureLine) -> None:
        """Process one decoded feature line."""
        ids = line.get_attribute(ID)[:1]
        references = {
            PARENT: list(dict.fromkeys(line.get_attribute(PARENT))),
            DERIVES_FROM: ([] if self.disable_derives_from_references
                           else list(dict.fromkeys(line.get_attribute(DERIVES_FROM)))),
        }
        has_references = bool(references[PARENT] or references[DERIVES_FROM])

        if not ids and not has_references:
            self.sink.emit(Feature(None, [line]))
            return

        if ids:
            feature_id = ids[0]
            feature = self._by_id.get(feature_id)
            if feature is not None:
                if feature.type != line.type:
                    raise StructuralError(feature_id, [line.type, feature.type])
                feature.append(line)
                if has_references:
                    self._top_level.pop(feature_id, None)
            else:
                feature = Feature(feature_id, [line])
                if not has_references:
                    self._enforce_buffer_size_limit(1)
                    self._top_level[feature_id] = feature
                self._by_id[feature_id] = feature
                self._resolve_references_to(feature)
        else:
            feature = Feature(None, [line])

        for kind in REFERENCE_KINDS:
            self._resolve_references_from(feature, kind, references[kind])

    def flush(self) -> None:
        """
        Emit every queued top-level feature and reset all tables.

        Raises UnresolvedReferenceError after emitting if any reference in
        the current scope was never satisfied.
        """
        logging.debug(f"Flushing {len(self._top_level)} top-level features")
        for feature in self._top_level.values():
            self.sink.emit(feature)

        missing = list(self._orphans)
        self.clear()
        if missing:
            raise UnresolvedReferenceError(missing)

    def clear(self) -> None:
        self._top_level = OrderedDict()
        self._by_id = {}
        self._completed_references = defaultdict(set)
        self._orphans = {}

    def _resolve_references_to(self, feature: Feature) -> None:
        """Attach features that were waiting for this feature's ID."""
        waiting = self._orphans.pop(feature.id, None)
        if waiting is None:
            return
        for location in feature:
            for kind in REFERENCE_KINDS:
                location.references(kind).extend(waiting[kind])

    def _resolve_references_from(self, feature: Feature, kind: str, targets: List[str]) -> None:
        for target_id in targets:
            if feature.id is not None:
                done = self._completed_references[feature.id]
                if (kind, target_id) in done:
                    continue
                done.add((kind, target_id))

            target = self._by_id.get(target_id)
            if target is not None:
                for location in target:
                    location.references(kind).append(feature)
            else:
                waiting = self._orphans.setdefault(target_id, {k: [] for k in REFERENCE_KINDS})
                waiting[kind].append(feature)

    def _enforce_buffer_size_limit(self, additional: int = 0) -> None:
        if self.buffer_size is None:
            return
        while self._top_level and len(self._top_level) + additional > self.buffer_size:
            _, oldest = self._top_level.popitem(last=False)
            logging.debug(f"Buffer full, emitting feature {oldest.id} early")
            self.sink.emit(oldest)
            self._unbuffer(oldest)

    def _unbuffer(self, feature: Feature) -> None:
        """Drop a feature and all its descendants from the index tables."""
        for item in [feature, *feature.iter_descendants()]:
            if item.id is not None:
                self._by_id.pop(item.id, None)
                self._completed_references.pop(item.id, None)
