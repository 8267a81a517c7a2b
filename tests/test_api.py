#!/usr/bin/env python3
"""
Tests for the convenience parsing functions.
"""

import unittest
import gffstream
from gffstream.errors import StructuralError, UnresolvedReferenceError
from gffstream.models import Comment, Directive, Feature, LineRecord

GENE_AND_MRNA = (
    "ctg123\t.\tgene\t1000\t9000\t.\t+\t.\tID=gene1\n"
    "ctg123\t.\tmRNA\t1050\t9000\t.\t+\t.\tID=mRNA1;Parent=gene1\n"
)
MRNA_AND_GENE = (
    "ctg123\t.\tmRNA\t1050\t9000\t.\t+\t.\tID=mRNA1;Parent=gene1\r\n"
    "ctg123\t.\tgene\t1000\t9000\t.\t+\t.\tID=gene1\r\n"
)


class ParseStringTests(unittest.TestCase):
    """Test cases for parse_string and parse_lines."""

    def test_either_order_gives_one_gene(self):
        for text in (GENE_AND_MRNA, MRNA_AND_GENE):
            with self.subTest(text=text):
                features = gffstream.parse_string(text)
                self.assertEqual(len(features), 1)
                gene = features[0]
                self.assertIsInstance(gene, Feature)
                self.assertEqual(gene.id, 'gene1')
                self.assertEqual([c.id for c in gene[0].child_features], ['mRNA1'])

    def test_escapes_and_whitespace(self):
        text = ("\nSL2.40%25ch01\tIT%25AG eugene\tg%25e;ne\t80999140\t81004317\t.\t+\t.\t"
                "multivalue=val1,val2,val3;testing=blah\n")
        features = gffstream.parse_string(text)
        self.assertEqual(len(features), 1)
        line = features[0][0]
        self.assertEqual(line.seq_id, 'SL2.40%ch01')
        self.assertEqual(line.source, 'IT%AG eugene')
        self.assertEqual(line.type, 'g%e;ne')
        self.assertEqual(line.start, 80999140)
        self.assertEqual(line.end, 81004317)
        self.assertIsNone(line.score)
        self.assertEqual(line.strand, '+')
        self.assertIsNone(line.phase)
        self.assertEqual(line.attributes, {'multivalue': ['val1', 'val2', 'val3'], 'testing': ['blah']})

    def test_parse_all_includes_other_items(self):
        text = "##gff-version 3\n# hello\n" + GENE_AND_MRNA + "##FASTA\n>ctg123\nACGT\n"
        items = gffstream.parse_string(text, parse_all=True)
        self.assertEqual(items[0], Directive('gff-version', '3'))
        self.assertEqual(items[1], Comment('hello'))
        self.assertIsInstance(items[2], Feature)
        self.assertEqual(items[3].id, 'ctg123')
        self.assertEqual(len(items), 4)

    def test_multi_line_alignment(self):
        text = ("ctg123\t.\tmatch_part\t100\t200\t.\t+\t.\tID=aln1\n"
                "ctg123\t.\tmatch_part\t500\t600\t.\t+\t.\tID=aln1\n")
        features = gffstream.parse_string(text)
        self.assertEqual(len(features), 1)
        self.assertEqual([(l.start, l.end) for l in features[0]], [(100, 200), (500, 600)])

    def test_errors_raise(self):
        with self.assertRaises(StructuralError):
            gffstream.parse_string("c\t.\tgene\t1\t2\t.\t+\t.\tID=g1\nc\t.\tmRNA\t1\t2\t.\t+\t.\tID=g1\n")
        with self.assertRaises(UnresolvedReferenceError):
            gffstream.parse_string("c\t.\tmRNA\t1\t2\t.\t+\t.\tID=t1;Parent=missing_id\n")

    def test_derives_from_option(self):
        text = "c\t.\tpolypeptide\t1\t2\t.\t+\t.\tID=p1;Derives_from=t9\n"
        with self.assertRaises(UnresolvedReferenceError):
            gffstream.parse_string(text)
        features = gffstream.parse_string(text, disable_derives_from_references=True)
        self.assertEqual([f.id for f in features], ['p1'])

    def test_parse_lines(self):
        features = gffstream.parse_lines(GENE_AND_MRNA.splitlines(True), buffer_size=10)
        self.assertEqual([f.id for f in features], ['gene1'])


class OtherInputTests(unittest.TestCase):
    """Test cases for field arrays, records and streaming iteration."""

    def test_parse_fields(self):
        rows = [
            ['ctg123', '.', 'gene', '1000', '9000', '.', '+', '.', 'ID=gene1'],
            ['ctg123', None, 'mRNA', '1050', '9000', None, '+', None, 'ID=mRNA1;Parent=gene1'],
        ]
        features = gffstream.parse_fields(rows)
        self.assertEqual([f.id for f in features], ['gene1'])
        self.assertEqual(features[0][0].child_features[0][0].start, 1050)

    def test_parse_fields_fast_path_matches(self):
        rows = [['ctg123', 'src', 'gene', '1', '10', '3.5', '-', '.', 'ID=g1;Note=plain text']]
        slow = gffstream.parse_fields(rows)
        fast = gffstream.parse_fields(rows, unescape_values=False)
        self.assertEqual(slow, fast)

    def test_parse_records(self):
        records = [LineRecord('ctg123\t.\tgene\t1000\t9000\t.\t+\t.\tID=gene00001', has_escapes=False)]
        features = gffstream.parse_records(records)
        self.assertEqual(len(features), 1)
        self.assertNotIn('_lineHash', features[0][0].attributes)
        self.assertEqual(features[0][0].attributes['ID'], ['gene00001'])

    def test_iter_features_streams(self):
        """Test that features come out at sync marks, before input ends."""
        seen = []

        def lines():
            yield "c\t.\tgene\t1\t2\t.\t+\t.\tID=g1"
            yield "###"
            seen.append('after sync')
            yield "c\t.\tgene\t5\t9\t.\t+\t.\tID=g2"

        stream = gffstream.iter_features(lines())
        first = next(stream)
        self.assertEqual(first.id, 'g1')
        self.assertEqual(seen, [])
        self.assertEqual([f.id for f in stream], ['g2'])
        self.assertEqual(seen, ['after sync'])


if __name__ == '__main__':
    unittest.main()
