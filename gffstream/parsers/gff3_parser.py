"""
Streaming parser for GFF3 (General Feature Format version 3) text.

Lines are classified as features, comments, directives, sync markers or
the start of a FASTA section. Feature lines are decoded and handed to the
reference resolver, which emits completed features through the sink.
"""

import re
import logging
from io import StringIO
from typing import Optional

from Bio import SeqIO

from gffstream.config import ParserConfig
from gffstream.errors import GFF3Error, MalformedLineError
from gffstream.models import Comment, FeatureLine, LineRecord
from gffstream.parsers.records import decode_line, parse_directive
from gffstream.parsers.resolver import ReferenceResolver
from gffstream.parsers.sink import EmissionSink

FEATURE_LINE_REGEX = re.compile(r'^\s*[^#\s>]')
COMMENT_OR_DIRECTIVE_REGEX = re.compile(r'^\s*(#+)(.*)')
BLANK_LINE_REGEX = re.compile(r'^\s*$')
FASTA_START_REGEX = re.compile(r'^\s*>')
LINE_ENDING_REGEX = re.compile(r'\r?\n?$')

LINE_HASH_ATTRIBUTE = '_lineHash'


class GFF3Parser:
    """Push parser: feed lines with add_line(), then call finish()."""

    def __init__(self, config: Optional[ParserConfig] = None, feature_callback=None,
                 comment_callback=None, directive_callback=None, sequence_callback=None,
                 end_callback=None, error_callback=None):
        self.config = (config or ParserConfig()).validate()
        self.sink = EmissionSink(
            feature_callback=feature_callback,
            comment_callback=comment_callback,
            directive_callback=directive_callback,
            sequence_callback=sequence_callback,
            end_callback=end_callback,
            error_callback=error_callback,
        )
        self.resolver = ReferenceResolver(
            self.sink,
            buffer_size=self.config.buffer_size,
            disable_derives_from_references=self.config.disable_derives_from_references,
        )
        self.line_number = 0
        self.eof = False
        self.failed = False
        self.finished = False
        self._fasta_lines = []
        self._in_fasta = False

    def add_line(self, line: str) -> None:
        """Feed one line of GFF3 text."""
        if self._in_fasta:
            self._collect_fasta_line(line)
            return
        if self.eof:
            return

        self.line_number += 1
        try:
            self._classify_line(line)
        except GFF3Error as error:
            self._fail(error)

    def add_parsed_feature_line(self, feature_line: FeatureLine) -> None:
        """Feed a feature line that was decoded elsewhere."""
        if self.eof:
            return
        self.line_number += 1
        if feature_line.line_num is None:
            feature_line.line_num = self.line_number
        try:
            self.resolver.add(feature_line)
        except GFF3Error as error:
            self._fail(error)

    def add_record(self, record: LineRecord) -> None:
        """Feed a raw feature line carrying caller metadata."""
        if self.eof:
            return
        self.line_number += 1
        try:
            feature_line = decode_line(record.line, unescape_values=record.has_escapes,
                                       line_num=self.line_number)
            if record.line_hash is not None:
                if feature_line.attributes is None:
                    feature_line.attributes = {}
                feature_line.attributes[LINE_HASH_ATTRIBUTE] = [str(record.line_hash)]
            self.resolver.add(feature_line)
        except GFF3Error as error:
            self._fail(error)

    def finish(self) -> None:
        """Flush everything still under construction and signal completion."""
        if self.failed or self.finished:
            return
        self.finished = True
        # lines fed after this point are ignored
        self.eof = True
        self._in_fasta = False
        try:
            self.resolver.flush()
        except GFF3Error as error:
            self._fail(error)
            return
        self._emit_sequences()
        logging.debug(f"Finished parsing {self.line_number} lines: "
                      f"{self.sink.emitted['feature']} features emitted")
        self.sink.end()

    def _classify_line(self, line: str) -> None:
        if FEATURE_LINE_REGEX.match(line):
            self.resolver.add(decode_line(line, line_num=self.line_number))
            return

        match = COMMENT_OR_DIRECTIVE_REGEX.match(line)
        if match:
            hashsigns, contents = match.group(1), match.group(2)
            if len(hashsigns) == 3:
                # sync mark, every forward reference so far is resolved
                self.resolver.flush()
            elif len(hashsigns) == 2:
                directive = parse_directive(line)
                if directive is None:
                    return
                if directive.directive == 'FASTA':
                    self._start_fasta()
                else:
                    self.sink.emit(directive)
            else:
                self.sink.emit(Comment(LINE_ENDING_REGEX.sub('', contents).lstrip()))
        elif BLANK_LINE_REGEX.match(line):
            pass
        elif FASTA_START_REGEX.match(line):
            self._start_fasta()
            self._collect_fasta_line(line)
        else:
            err_line = LINE_ENDING_REGEX.sub('', line)
            raise MalformedLineError(f"GFF3 parse error.  Cannot parse '{err_line}'.", line=err_line)

    def _start_fasta(self) -> None:
        self.resolver.flush()
        self.eof = True
        self._in_fasta = True

    def _collect_fasta_line(self, line: str) -> None:
        if not self.config.collect_sequences or self.sink.sequence_callback is None:
            return
        if not BLANK_LINE_REGEX.match(line):
            self._fasta_lines.append(LINE_ENDING_REGEX.sub('', line))

    def _emit_sequences(self) -> None:
        if not self._fasta_lines:
            return
        handle = StringIO("\n".join(self._fasta_lines) + "\n")
        for record in SeqIO.parse(handle, "fasta"):
            self.sink.emit(record)
        self._fasta_lines = []

    def _fail(self, error: GFF3Error) -> None:
        """Halt parsing and report error through the configured channel."""
        self.failed = True
        self.eof = True
        self._in_fasta = False
        self.resolver.clear()
        if error.line_number is None:
            error.line_number = self.line_number
        logging.debug(f"GFF3 parse failed: {error}")
        if self.sink.error_callback is not None:
            self.sink.error_callback(error)
        else:
            raise error
