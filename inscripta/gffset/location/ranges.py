"""
Coordinate range operations on features: subsetting a :class:`~gffset.gene.feature_set.FeatureSet` by range and
reverse complementing features within a range.

Subsets are always new FeatureSets holding copies of the selected features. They carry the metadata of the source
set but never its grouping.
"""
from dataclasses import dataclass
from typing import List

from inscripta.gffset.exc import InvalidRangeError
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.location.strand import Strand


@dataclass
class RangeCursor:
    """
    Position in a sorted feature list at which the next :func:`subset_range_overlap_sorted` scan begins. Reusing one
    cursor across queries with ascending ranges makes a full sweep linear rather than quadratic.
    """

    index: int = 0


def _check_range(start: int, end: int):
    if end < start:
        raise InvalidRangeError(f"Range end {end} is before range start {start}")


def subset_range(feature_set: FeatureSet, start: int, end: int, reset_indices: bool = False) -> FeatureSet:
    """
    Features that lie entirely within ``[start, end]``.

    NOTE: This is a linear search.

    Args:
        feature_set: FeatureSet to select from.
        start: 1-based inclusive range start.
        end: 1-based inclusive range end.
        reset_indices: Renumber coordinates so that ``start`` becomes position 1.
    """
    _check_range(start, end)
    subset = FeatureSet.from_template(feature_set)
    for feature in feature_set.features:
        if feature.is_contained_in(start, end):
            new_feature = feature.copy()
            if reset_indices:
                new_feature.start = new_feature.start - start + 1
                new_feature.end = new_feature.end - start + 1
            subset.features.append(new_feature)
    return subset


def subset_range_overlap(feature_set: FeatureSet, start: int, end: int) -> FeatureSet:
    """
    Features that overlap ``[start, end]`` at all, even if parts of them fall outside. Coordinates are never
    renumbered.

    NOTE: This is a linear search.
    """
    _check_range(start, end)
    return FeatureSet.from_template(feature_set, [f.copy() for f in feature_set.features if f.overlaps(start, end)])


def subset_range_overlap_sorted(feature_set: FeatureSet, start: int, end: int, cursor: RangeCursor) -> FeatureSet:
    """
    Like :func:`subset_range_overlap`, but assumes the features are sorted by start position. The scan begins at
    ``cursor.index``, which must not be past any feature that overlaps the range, and stops at the first feature
    starting after ``end``. The cursor is moved to the first overlapping feature, or left alone if there is none.
    """
    _check_range(start, end)
    subset = FeatureSet.from_template(feature_set)
    for i in range(cursor.index, len(feature_set.features)):
        feature = feature_set.features[i]
        if feature.overlaps(start, end):
            if not subset.features:
                cursor.index = i
            subset.features.append(feature.copy())
        elif feature.start > end:
            break
    return subset


def reverse_strand_only(features: List[Feature]) -> bool:
    """True if no feature is on the plus strand and at least one is on the minus strand."""
    strands = {f.strand for f in features}
    return Strand.MINUS in strands and Strand.PLUS not in strands


def reverse_complement(features: List[Feature], range_start: int, range_end: int):
    """
    Adjust coordinates and strands of features to reflect reverse complementation of the range
    ``[range_start, range_end]``, and reverse the order of the list in place (features are generally in ascending
    order, and stay that way). Features and range must use the same coordinate system.
    """
    for feature in features:
        start = feature.start
        feature.start = range_end - feature.end + range_start
        feature.end = range_end - start + range_start
        feature.strand = feature.strand.reverse()
    features.reverse()
