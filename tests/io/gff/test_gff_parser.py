from io import StringIO

import pytest

from inscripta.gffset.gene.cds_frame import CDSFrame
from inscripta.gffset.io.exc import InvalidInputError
from inscripta.gffset.io.gff.exc import GFFParserError
from inscripta.gffset.io.gff.parser import parse_gff, parse_gff_file, parse_gff_record
from inscripta.gffset.location.strand import Strand


class TestParseGFF:
    def test_parse_file(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "transcripts.gtf")
        assert len(feature_set) == 7
        assert not feature_set.is_grouped
        assert feature_set.gff_version == "2"
        assert feature_set.source == "genepred"
        assert feature_set.source_version == "1.4"
        assert feature_set.date == "2019-3-7"

        first = feature_set.features[0]
        assert (first.seqname, first.source, first.type, first.start, first.end) == (
            "chr1",
            "genepred",
            "exon",
            100,
            300,
        )
        assert first.score is None
        assert first.strand == Strand.PLUS
        assert first.frame == CDSFrame.NONE
        assert first.attribute == 'gene_id "g1"; transcript_id "t1";'

    def test_file_order_kept(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "transcripts.gtf")
        assert [f.start for f in feature_set] == [100, 150, 400, 400, 250, 1000, 1050]

    def test_frames_converted(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "transcripts.gtf")
        frames = [f.frame for f in feature_set if f.type == "CDS"]
        # phases 0, 2, 0, 1
        assert frames == [CDSFrame.ZERO, CDSFrame.ONE, CDSFrame.ZERO, CDSFrame.TWO]

    def test_scores(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "transcripts.gtf")
        assert [f.score for f in feature_set if f.type == "CDS"] == [4.5, 3.0, 2.0, 6.0]

    def test_minimal_columns(self, test_data_dir):
        feature_set = parse_gff_file(test_data_dir / "minimal_columns.gff")
        assert len(feature_set) == 4
        assert feature_set.gff_version == ""
        f1, f2, f3, f4 = feature_set.features
        assert (f1.score, f1.strand, f1.frame, f1.attribute) == (None, Strand.UNSTRANDED, CDSFrame.NONE, "")
        assert f2.score == 1.5
        assert f3.strand == Strand.MINUS
        assert f4.frame == CDSFrame.TWO
        assert f4.seqname == "chr2"

    def test_metadata_after_first_record_ignored(self):
        gff = StringIO("##gff-version 2\nchr1\tsrc\texon\t1\t10\n##gff-version 3\nchr1\tsrc\texon\t20\t30\n")
        feature_set = parse_gff(gff)
        assert feature_set.gff_version == "2"
        assert len(feature_set) == 2

    def test_metadata_tags_case_insensitive(self):
        feature_set = parse_gff(StringIO("##GFF-Version 2\n##Date 2020-01-01\n"))
        assert feature_set.gff_version == "2"
        assert feature_set.date == "2020-01-01"

    def test_source_version_needs_two_values(self):
        feature_set = parse_gff(StringIO("##source-version genepred\n"))
        assert feature_set.source == ""
        assert feature_set.source_version == ""

    def test_blank_and_whitespace_lines(self):
        feature_set = parse_gff(StringIO("\n   \nchr1\tsrc\texon\t1\t10\t.\t+\n\n"))
        assert len(feature_set) == 1

    def test_empty(self):
        assert len(parse_gff(StringIO(""))) == 0

    @pytest.mark.parametrize("score,expected", [("1e3", 1000.0), ("-.5", -0.5), ("+2.", 2.0), ("7", 7.0)])
    def test_score_notation(self, score, expected):
        feature_set = parse_gff(StringIO(f"chr1\tsrc\texon\t1\t10\t{score}\t+\n"))
        assert feature_set.features[0].score == expected


class TestParseErrors:
    @pytest.mark.parametrize(
        "line,message",
        [
            ("chr1\tsrc\texon\t1", "minimum of 5 columns"),
            ("chr1 src exon 1 10", "minimum of 5 columns"),
            ("chr1\tsrc\texon\tone\t10", "'start'"),
            ("chr1\tsrc\texon\t1\tten", "'end'"),
            ("chr1\tsrc\texon\t1\t10\thigh", "'score'"),
            ("chr1\tsrc\texon\t1\t10\t.\t*", "'strand'"),
            ("chr1\tsrc\texon\t1\t10\t.\t+\t3", "'frame'"),
            ("chr1\tsrc\texon\t1\t10\t.\t+\tx", "'frame'"),
            ("chr1\tsrc\texon\t1_0\t20", "'start'"),
            ("chr1\tsrc\texon\t1\t2_0", "'end'"),
            ("chr1\tsrc\texon\t1\t 20", "'end'"),
            ("chr1\tsrc\texon\t1\t10\t1_0", "'score'"),
            ("chr1\tsrc\texon\t1\t10\tnan", "'score'"),
            ("chr1\tsrc\texon\t1\t10\t.\t+\t1_0", "'frame'"),
        ],
    )
    def test_line_number_reported(self, line, message):
        gff = StringIO(f"# header\nchr1\tsrc\texon\t1\t10\n{line}\n")
        with pytest.raises(GFFParserError) as excinfo:
            parse_gff(gff)
        assert excinfo.value.line_number == 3
        assert str(excinfo.value).startswith("line 3: ")
        assert message in str(excinfo.value)

    def test_is_invalid_input(self):
        with pytest.raises(InvalidInputError):
            parse_gff(StringIO("chr1\tsrc\texon\n"))

    def test_record_without_line_number(self):
        with pytest.raises(GFFParserError) as excinfo:
            parse_gff_record(["chr1", "src"])
        assert excinfo.value.line_number is None
        assert not str(excinfo.value).startswith("line")
