import pytest

from inscripta.gffset.exc import InvalidRangeError
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.location.ranges import (
    RangeCursor,
    reverse_complement,
    reverse_strand_only,
    subset_range,
    subset_range_overlap,
    subset_range_overlap_sorted,
)
from inscripta.gffset.location.strand import Strand


def feature(start, end, strand=Strand.PLUS):
    return Feature("chr1", "test", "exon", start, end, strand=strand)


@pytest.fixture
def feature_set():
    return FeatureSet(
        [feature(10, 20), feature(15, 40), feature(30, 35), feature(50, 60), feature(100, 200)],
        gff_version="2",
        source="pipeline",
        source_version="1.0",
        date="2020-1-2",
    )


def spans(feature_set):
    return [(f.start, f.end) for f in feature_set]


class TestSubsetRange:
    def test_contained_only(self, feature_set):
        subset = subset_range(feature_set, 10, 40)
        assert spans(subset) == [(10, 20), (15, 40), (30, 35)]
        assert subset.source == "pipeline"
        assert subset.date == "2020-1-2"
        assert not subset.is_grouped

    def test_copies(self, feature_set):
        subset = subset_range(feature_set, 10, 40)
        assert subset.features[0] is not feature_set.features[0]
        assert subset.features[0].same_as(feature_set.features[0])

    def test_reset_indices(self, feature_set):
        subset = subset_range(feature_set, 26, 65, reset_indices=True)
        assert spans(subset) == [(5, 10), (25, 35)]
        assert spans(feature_set)[2:4] == [(30, 35), (50, 60)]

    def test_empty(self, feature_set):
        subset = subset_range(feature_set, 61, 99)
        assert len(subset) == 0
        assert subset.gff_version == "2"

    def test_invalid_range(self, feature_set):
        with pytest.raises(InvalidRangeError):
            subset_range(feature_set, 20, 10)

    def test_grouping_not_carried(self, feature_set):
        feature_set.group_by_type()
        assert not subset_range(feature_set, 1, 1000).is_grouped


class TestSubsetRangeOverlap:
    def test_overlap(self, feature_set):
        subset = subset_range_overlap(feature_set, 18, 32)
        assert spans(subset) == [(10, 20), (15, 40), (30, 35)]

    def test_single_base(self, feature_set):
        assert spans(subset_range_overlap(feature_set, 60, 60)) == [(50, 60)]

    def test_empty(self, feature_set):
        assert len(subset_range_overlap(feature_set, 61, 99)) == 0

    def test_invalid_range(self, feature_set):
        with pytest.raises(InvalidRangeError):
            subset_range_overlap(feature_set, 2, 1)


class TestSubsetRangeOverlapSorted:
    def test_matches_unsorted_version(self, feature_set):
        for start, end in [(1, 5), (18, 32), (36, 55), (61, 99), (150, 300)]:
            expected = spans(subset_range_overlap(feature_set, start, end))
            assert spans(subset_range_overlap_sorted(feature_set, start, end, RangeCursor())) == expected

    def test_cursor_moves_to_first_match(self, feature_set):
        cursor = RangeCursor()
        subset_range_overlap_sorted(feature_set, 36, 55, cursor)
        assert cursor.index == 1

    def test_cursor_unchanged_without_match(self, feature_set):
        cursor = RangeCursor(2)
        assert len(subset_range_overlap_sorted(feature_set, 61, 99, cursor)) == 0
        assert cursor.index == 2

    def test_sweep_with_shared_cursor(self, feature_set):
        cursor = RangeCursor()
        results = [
            spans(subset_range_overlap_sorted(feature_set, start, end, cursor))
            for start, end in [(12, 14), (36, 45), (55, 150)]
        ]
        assert results == [[(10, 20)], [(15, 40)], [(50, 60), (100, 200)]]
        assert cursor.index == 3

    def test_invalid_range(self, feature_set):
        with pytest.raises(InvalidRangeError):
            subset_range_overlap_sorted(feature_set, 2, 1, RangeCursor())


class TestReverseStrandOnly:
    @pytest.mark.parametrize(
        "strands,expected",
        [
            ([Strand.MINUS, Strand.MINUS], True),
            ([Strand.MINUS, Strand.UNSTRANDED], True),
            ([Strand.MINUS, Strand.PLUS], False),
            ([Strand.UNSTRANDED], False),
            ([], False),
        ],
    )
    def test_reverse_strand_only(self, strands, expected):
        assert reverse_strand_only([feature(1, 10, s) for s in strands]) == expected


class TestReverseComplement:
    def test_coordinates_and_order(self):
        features = [feature(1, 10), feature(20, 30, Strand.MINUS), feature(50, 100, Strand.UNSTRANDED)]
        reverse_complement(features, 1, 100)
        assert [(f.start, f.end, f.strand) for f in features] == [
            (1, 51, Strand.UNSTRANDED),
            (71, 81, Strand.PLUS),
            (91, 100, Strand.MINUS),
        ]

    def test_offset_range(self):
        features = [feature(101, 110)]
        reverse_complement(features, 101, 200)
        assert (features[0].start, features[0].end) == (191, 200)

    def test_twice_is_identity(self):
        features = [feature(5, 10), feature(20, 30, Strand.MINUS)]
        reverse_complement(features, 1, 50)
        reverse_complement(features, 1, 50)
        assert [(f.start, f.end, f.strand) for f in features] == [(5, 10, Strand.PLUS), (20, 30, Strand.MINUS)]
