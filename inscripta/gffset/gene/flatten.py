"""
Merge overlapping or adjacent features of the same type.

Both functions assume the features are sorted. Two features merge when they overlap or abut, are on the same strand,
have the same type and neither has a frame; merging features with frames would invalidate the frames. When two
features merge their scores are summed (only if both are scored) and the attribute of the second is dropped.
"""
import logging
from typing import Dict

from inscripta.gffset.exc import GroupMembershipError
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet

logger = logging.getLogger(__name__)


def _can_merge(last: Feature, this: Feature) -> bool:
    return (
        last.end >= this.start - 1
        and last.strand == this.strand
        and last.type == this.type
        and last.frame.is_null
        and this.frame.is_null
    )


def _merge_into(last: Feature, this: Feature):
    last.end = max(last.end, this.end)
    if not last.score_is_null and not this.score_is_null:
        last.score += this.score


def _owner(owner: Dict[int, int], feature: Feature) -> int:
    try:
        return owner[id(feature)]
    except KeyError:
        raise GroupMembershipError(f"{feature} is not a member of any group")


def flatten(feature_set: FeatureSet) -> int:
    """
    Merge overlapping or adjacent features of the same type, across group boundaries. If anything was merged, the
    grouping is removed, because merged features no longer belong to a single group.

    Returns:
        The number of features that were merged away.
    """
    if len(feature_set.features) <= 1:
        return 0

    last = feature_set.features[0]
    keepers = [last]
    for this in feature_set.features[1:]:
        if _can_merge(last, this):
            _merge_into(last, this)
        else:
            keepers.append(this)
            last = this

    merged = len(feature_set.features) - len(keepers)
    if merged:
        feature_set.features = keepers
        feature_set.ungroup()
        logger.debug(f"Flattened {merged} features")
    return merged


def flatten_within_groups(feature_set: FeatureSet) -> int:
    """
    Merge overlapping or adjacent features of the same type, but only if they are in the same group. Merged features
    are removed from their groups, so the grouping stays valid. If the set is not grouped this is the same as
    :func:`flatten`.

    Returns:
        The number of features that were merged away.
    """
    grouping = feature_set.grouping
    if grouping is None:
        return flatten(feature_set)
    if len(feature_set.features) <= 1:
        return 0

    # map each feature to its group once, instead of scanning every group for every candidate pair
    owner: Dict[int, int] = {id(f): i for i, g in enumerate(grouping.groups) for f in g.features}
    removed = set()

    last = feature_set.features[0]
    keepers = [last]
    for this in feature_set.features[1:]:
        if _can_merge(last, this) and _owner(owner, last) == _owner(owner, this):
            _merge_into(last, this)
            removed.add(id(this))
        else:
            keepers.append(this)
            last = this

    if removed:
        feature_set.features = keepers
        for group in grouping.groups:
            group.features = [f for f in group.features if id(f) not in removed]
        logger.debug(f"Flattened {len(removed)} features within groups")
    return len(removed)
