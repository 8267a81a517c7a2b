"""
Exceptions raised while parsing GFF3 data.
"""


class GFF3Error(Exception):
    """Base class for fatal GFF3 parse errors."""

    def __init__(self, message, line_number=None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self):
        if self.line_number is not None:
            return f"{self.line_number}: {self.message}"
        return self.message


class StructuralError(GFF3Error):
    """Lines sharing an ID disagree about the feature type."""

    def __init__(self, feature_id, types, line_number=None):
        self.feature_id = feature_id
        self.types = tuple(types)
        quoted = ", ".join(f'"{t}"' for t in self.types)
        super().__init__(f'multi-line feature "{feature_id}" has inconsistent types: {quoted}',
                         line_number)


class UnresolvedReferenceError(GFF3Error):
    """Parent/Derives_from targets that never appeared in the current scope."""

    def __init__(self, missing_ids, line_number=None):
        self.missing_ids = list(missing_ids)
        super().__init__("some features reference other features that do not exist "
                         "in the file (or in the same '###' scope). "
                         + ",".join(self.missing_ids),
                         line_number)


class MalformedLineError(GFF3Error):
    """A line that cannot be decoded or classified."""

    def __init__(self, message, line=None, line_number=None):
        self.line = line
        super().__init__(message, line_number)
