"""
Resolve overlapping groups of a :class:`~gffset.gene.feature_set.FeatureSet`.

Groups are considered one at a time in their current order, which should be ascending span order (call
:meth:`~gffset.gene.feature_set.FeatureSet.sort` first). Kept groups are tracked in parallel lists of starts, ends
and scores that stay sorted and pairwise non-overlapping, so the groups a candidate collides with can be found by
binary search. A candidate replaces the run of kept groups it overlaps only if its score is strictly greater than
their combined score; ties go to the groups that were already kept.
"""
import logging
from bisect import bisect_right
from typing import List, Optional, TextIO

from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.gene.group import FeatureGroup
from inscripta.gffset.io.gff.writer import write_features

logger = logging.getLogger(__name__)


def remove_overlaps(feature_set: FeatureSet, discards_handle: Optional[TextIO] = None) -> List[FeatureGroup]:
    """
    Identify overlapping groups and keep the best scoring subset that does not overlap.

    The score of a group is the sum of the scores of its features or, if none of its features is scored, its span.

    Args:
        feature_set: A grouped FeatureSet. Modified in place.
        discards_handle: If given, the features of discarded groups are written here as GFF.

    Returns:
        The discarded groups, in the order they were discarded.

    Raises:
        GroupingRequiredError: if the set is not grouped.
    """
    grouping = feature_set.require_grouping("remove_overlaps")

    starts: List[int] = []
    ends: List[int] = []
    scores: List[float] = []
    keepers: List[FeatureGroup] = []
    discarded: List[FeatureGroup] = []
    last_end = -1

    for group in grouping.groups:
        score = group.score()

        # common case; starts after everything kept so far
        if group.start > last_end:
            starts.append(group.start)
            ends.append(group.end)
            scores.append(score)
            keepers.append(group)
            last_end = group.end
            continue

        # index of the kept group with the greatest start <= this start, -1 if none
        list_idx = bisect_right(starts, group.start) - 1
        prev_end = ends[list_idx] if list_idx >= 0 else -1
        next_start = starts[list_idx + 1] if list_idx + 1 < len(starts) else None
        round_discards = []
        add_this_group = True

        if prev_end >= group.start or (next_start is not None and next_start <= group.end):
            altscore = 0.0
            min_idx = list_idx
            while min_idx >= 0 and ends[min_idx] >= group.start:
                altscore += scores[min_idx]
                min_idx -= 1
            min_idx += 1
            max_idx = list_idx + 1
            while max_idx < len(starts) and starts[max_idx] <= group.end:
                altscore += scores[max_idx]
                max_idx += 1

            if score > altscore:
                round_discards = keepers[min_idx:max_idx]
                del starts[min_idx:max_idx]
                del ends[min_idx:max_idx]
                del scores[min_idx:max_idx]
                del keepers[min_idx:max_idx]
                list_idx = min_idx - 1
                logger.debug(f"{group} (score {score}) replaces {len(round_discards)} groups (score {altscore})")
            else:
                round_discards = [group]
                add_this_group = False
                logger.debug(f"{group} (score {score}) discarded in favor of groups with score {altscore}")

        if add_this_group:
            starts.insert(list_idx + 1, group.start)
            ends.insert(list_idx + 1, group.end)
            scores.insert(list_idx + 1, score)
            keepers.insert(list_idx + 1, group)
            last_end = max(last_end, group.end)

        for discard in round_discards:
            if discards_handle is not None:
                write_features(discard.features, discards_handle)
            discarded.append(discard)

    grouping.groups = keepers
    feature_set.features = list(grouping.features())
    if discarded:
        logger.info(f"Removed {len(discarded)} overlapping groups; kept {len(keepers)}")
    return discarded
