"""
Groups partition the features of a :class:`~gffset.gene.feature_set.FeatureSet`. A group never owns its features;
it holds references to Feature objects that also live in the set's feature list.

Grouping by attribute tag only looks at column 9 when it is needed. The attribute is matched against a pattern of
the form ``<tag> ("quoted value"|bare-value)``; the last occurrence of the tag wins.
"""
import re
from dataclasses import dataclass, field
from typing import List, Optional, Iterator, Pattern

from methodtools import lru_cache

from inscripta.gffset.gene.feature import Feature, feature_sort_key


@lru_cache(maxsize=None)
def tag_pattern(tag: str) -> Pattern:
    """Compiled pattern that captures the value of ``tag``. Built once per distinct tag."""
    return re.compile(r".*{}\s+(\"[^\"]*\"|\S+)".format(re.escape(tag)))


def extract_tag_value(attribute: str, tag: str) -> str:
    """
    Find the value of ``tag`` in an attribute string. A trailing semicolon and surrounding double quotes are
    removed. Returns the empty string if the tag is absent.

    >>> extract_tag_value('gene_id "g1"; transcript_id "t1";', "transcript_id")
    't1'
    """
    if len(attribute) <= len(tag):
        return ""
    match = tag_pattern(tag).match(attribute)
    if match is None:
        return ""
    value = match.group(1)
    if value.endswith(";"):
        value = value[:-1]
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1]
    return value


@dataclass(eq=False)
class FeatureGroup:
    """
    A named group of features, such as all of the records of one transcript.

    ``start`` and ``end`` are the span of the group. The span is initialized from the first member and widened by
    every member added after it; it is never narrowed, even if members are later removed or trimmed.
    """

    name: str
    start: int
    end: int
    features: List[Feature] = field(default_factory=list)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __len__(self):
        return len(self.features)

    def __repr__(self):
        return f"FeatureGroup(name={self.name}, start={self.start}, end={self.end}, n_features={len(self.features)})"

    @staticmethod
    def from_feature(name: str, feature: Feature) -> "FeatureGroup":
        return FeatureGroup(name, feature.start, feature.end, [feature])

    def add(self, feature: Feature):
        """Add a member and widen the span to include it"""
        if feature.start < self.start:
            self.start = feature.start
        if feature.end > self.end:
            self.end = feature.end
        self.features.append(feature)

    def has_scores(self) -> bool:
        return any(not f.score_is_null for f in self.features)

    def score(self) -> float:
        """
        Rough score used to choose between overlapping groups: the sum of member scores if any member is scored,
        otherwise the span of the group.
        """
        if self.has_scores():
            return sum(f.score for f in self.features if not f.score_is_null)
        return float(self.end - self.start + 1)

    def features_of_type(self, feature_type: str) -> List[Feature]:
        return [f for f in self.features if f.type == feature_type]

    def sort(self):
        self.features.sort(key=feature_sort_key)

    def index_of(self, feature: Feature) -> Optional[int]:
        """Position of ``feature`` in this group, by identity, or None"""
        for i, member in enumerate(self.features):
            if member is feature:
                return i
        return None


def group_sort_key(group: FeatureGroup):
    """Groups sort by their maintained span: start, then end."""
    return group.start, group.end


@dataclass
class Grouping:
    """
    The groups of a FeatureSet, along with the tag they were built from. ``by_type`` is True when the groups are
    keyed by feature type rather than by an attribute tag.
    """

    tag: str
    groups: List[FeatureGroup] = field(default_factory=list)
    by_type: bool = False

    def __iter__(self) -> Iterator[FeatureGroup]:
        return iter(self.groups)

    def __len__(self):
        return len(self.groups)

    @property
    def names(self) -> List[str]:
        return [g.name for g in self.groups]

    def features(self) -> Iterator[Feature]:
        """All member features, in group order"""
        for group in self.groups:
            yield from group.features
