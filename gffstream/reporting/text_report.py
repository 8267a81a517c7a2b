"""
Plain-text summary of a parsed GFF3 file.
"""

import sys
from collections import Counter


class FeatureSummary:
    """Collects statistics from parser callbacks."""

    def __init__(self):
        self.top_level_by_type = Counter()
        self.features_by_type = Counter()
        self.multi_line_features = 0
        self.max_depth = 0
        self.directives = Counter()
        self.comments = 0
        self.sequences = []

    def add_feature(self, feature):
        self.top_level_by_type[feature.type or '.'] += 1
        # (feature, depth) pairs; a feature reachable by two paths is counted once
        seen = set()
        stack = [(feature, 1)]
        while stack:
            current, depth = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))
            self.features_by_type[current.type or '.'] += 1
            if len(current) > 1:
                self.multi_line_features += 1
            self.max_depth = max(self.max_depth, depth)
            for line in current:
                for other in line.child_features + line.derived_features:
                    stack.append((other, depth + 1))

    def add_directive(self, directive):
        self.directives[directive.directive] += 1

    def add_comment(self, comment):
        self.comments += 1

    def add_sequence(self, record):
        self.sequences.append((record.id, len(record.seq)))

    def callbacks(self):
        """Keyword arguments wiring this summary into a GFF3Parser."""
        return {
            'feature_callback': self.add_feature,
            'directive_callback': self.add_directive,
            'comment_callback': self.add_comment,
            'sequence_callback': self.add_sequence,
        }


def generate_summary_report(summary, outfile=None, title=None):
    """Write a summary report to outfile, or stdout when no file is given."""
    out = open(outfile, 'w') if outfile else sys.stdout
    try:
        out.write(f"# GFF3 Summary{': ' + title if title else ''}\n")
        out.write("#" + "=" * 79 + "\n\n")

        out.write("## Features\n")
        out.write("-" * 80 + "\n")
        out.write(f"Top-level Features: {sum(summary.top_level_by_type.values())}\n")
        out.write(f"Total Features: {sum(summary.features_by_type.values())}\n")
        out.write(f"Multi-line Features: {summary.multi_line_features}\n")
        out.write(f"Maximum Nesting Depth: {summary.max_depth}\n\n")

        out.write("Top-level Features by Type:\n")
        for feature_type, count in sorted(summary.top_level_by_type.items()):
            out.write(f"  {feature_type}: {count}\n")

        out.write("\nAll Features by Type:\n")
        for feature_type, count in sorted(summary.features_by_type.items(), key=lambda x: (-x[1], x[0])):
            out.write(f"  {feature_type}: {count}\n")

        out.write("\n## Other Items\n")
        out.write("-" * 80 + "\n")
        out.write(f"Comments: {summary.comments}\n")
        out.write(f"Directives: {sum(summary.directives.values())}\n")
        for name, count in sorted(summary.directives.items()):
            out.write(f"  {name}: {count}\n")
        out.write(f"Sequences: {len(summary.sequences)}\n")
        for seq_id, length in summary.sequences:
            out.write(f"  {seq_id}: {length} bp\n")
    finally:
        if outfile:
            out.close()
