from io import StringIO

import pytest

from inscripta.gffset.gene.cds_frame import CDSFrame, CDSPhase
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.io.gff.parser import parse_gff, parse_gff_file
from inscripta.gffset.io.gff.rows import GFFRow
from inscripta.gffset.io.gff.writer import feature_set_to_gff, feature_to_gff_row, write_feature
from inscripta.gffset.location.strand import Strand


class TestWriteFeature:
    @pytest.mark.parametrize(
        "score,frame,strand,expected",
        [
            (None, CDSFrame.NONE, Strand.UNSTRANDED, "chr1\tsrc\tCDS\t1\t10\t.\t.\t.\tgene_id \"g\""),
            (2.0, CDSFrame.ZERO, Strand.PLUS, "chr1\tsrc\tCDS\t1\t10\t2.000\t+\t0\tgene_id \"g\""),
            (0.12345, CDSFrame.ONE, Strand.MINUS, "chr1\tsrc\tCDS\t1\t10\t0.123\t-\t2\tgene_id \"g\""),
            (-1.5, CDSFrame.TWO, Strand.PLUS, "chr1\tsrc\tCDS\t1\t10\t-1.500\t+\t1\tgene_id \"g\""),
        ],
    )
    def test_write_feature(self, score, frame, strand, expected):
        handle = StringIO()
        write_feature(Feature("chr1", "src", "CDS", 1, 10, score, strand, frame, 'gene_id "g"'), handle)
        assert handle.getvalue() == expected + "\n"

    def test_row(self):
        row = feature_to_gff_row(Feature("chr1", "src", "CDS", 1, 10, frame=CDSFrame.TWO))
        assert isinstance(row, GFFRow)
        assert row.phase == CDSPhase.ONE
        assert row.score is None


class TestFeatureSetToGFF:
    def test_headers(self):
        feature_set = FeatureSet(
            [Feature("chr1", "src", "exon", 1, 10)],
            gff_version="2",
            source="genepred",
            source_version="1.4",
            date="2019-3-7",
        )
        handle = StringIO()
        feature_set_to_gff(feature_set, handle)
        assert handle.getvalue().splitlines() == [
            "##gff-version 2",
            "##source-version genepred 1.4",
            "##date 2019-3-7",
            "chr1\tsrc\texon\t1\t10\t.\t.\t.\t",
        ]

    def test_headers_omitted_when_unset(self):
        handle = StringIO()
        feature_set_to_gff(FeatureSet([Feature("chr1", "src", "exon", 1, 10)]), handle)
        assert not handle.getvalue().startswith("#")

    def test_round_trip(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "transcripts.gtf")
        handle = StringIO()
        feature_set_to_gff(feature_set, handle)
        handle.seek(0)
        reparsed = parse_gff(handle)
        assert len(reparsed) == len(feature_set)
        assert all(a.same_as(b) for a, b in zip(feature_set, reparsed))
        assert (reparsed.gff_version, reparsed.source, reparsed.source_version, reparsed.date) == (
            "2",
            "genepred",
            "1.4",
            "2019-3-7",
        )

    def test_round_trip_minimal_columns(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "minimal_columns.gff")
        handle = StringIO()
        feature_set_to_gff(feature_set, handle)
        handle.seek(0)
        assert all(a.same_as(b) for a, b in zip(feature_set, parse_gff(handle)))
