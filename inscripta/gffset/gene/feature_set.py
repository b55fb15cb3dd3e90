"""
The :class:`FeatureSet` is the container that every transform operates on: an ordered list of features, the file
level metadata that came with them, and an optional :class:`~gffset.gene.group.Grouping`.

While a grouping exists every feature of the set belongs to exactly one group. Any method here that changes the
feature list either keeps the groups in step or drops the grouping before returning.
"""
import logging
from datetime import date
from typing import List, Optional, Iterator, Iterable, TextIO, Dict, Tuple

from inscripta.gffset.exc import GroupingRequiredError, GroupMembershipError
from inscripta.gffset.gene.feature import Feature, feature_sort_key
from inscripta.gffset.gene.group import FeatureGroup, Grouping, extract_tag_value, group_sort_key
from inscripta.gffset.io.gff.constants import (
    ATTRIBUTE_SEPARATOR,
    DEFAULT_GFF_VERSION,
    GROUP_BY_FEATURE_TAG,
    NULL_COLUMN,
)
from inscripta.gffset.io.gff.writer import write_feature

logger = logging.getLogger(__name__)


class FeatureSet:
    """
    An ordered collection of :class:`~gffset.gene.feature.Feature` objects. Order is meaningful: it is the file
    order until the set is sorted.
    """

    def __init__(
        self,
        features: Optional[Iterable[Feature]] = None,
        gff_version: str = "",
        source: str = "",
        source_version: str = "",
        date: str = "",
    ):
        self.features: List[Feature] = list(features) if features else []
        self.gff_version = gff_version
        self.source = source
        self.source_version = source_version
        self.date = date
        self.grouping: Optional[Grouping] = None

    def __len__(self):
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __repr__(self):
        grouping = f", groups={len(self.grouping)}" if self.grouping else ""
        return f"FeatureSet(n_features={len(self.features)}{grouping})"

    @staticmethod
    def from_template(template: "FeatureSet", features: Optional[Iterable[Feature]] = None) -> "FeatureSet":
        """New set with the same version, source, source version and date as ``template``."""
        return FeatureSet(
            features,
            gff_version=template.gff_version,
            source=template.source,
            source_version=template.source_version,
            date=template.date,
        )

    @staticmethod
    def initialize(source: str, source_version: str) -> "FeatureSet":
        """New empty set with the default GFF version and today's date."""
        today = date.today()
        return FeatureSet(
            gff_version=DEFAULT_GFF_VERSION,
            source=source,
            source_version=source_version,
            date=f"{today.year}-{today.month}-{today.day}",
        )

    @property
    def is_grouped(self) -> bool:
        return self.grouping is not None

    @property
    def groups(self) -> List[FeatureGroup]:
        return self.grouping.groups if self.grouping else []

    @property
    def group_tag(self) -> Optional[str]:
        return self.grouping.tag if self.grouping else None

    def require_grouping(self, operation: str) -> Grouping:
        if self.grouping is None:
            raise GroupingRequiredError(f"{operation} requires a grouped FeatureSet")
        return self.grouping

    def append(self, feature: Feature, group: Optional[FeatureGroup] = None):
        """
        Append a feature to the set. If the set is grouped, the owning group must be given so that membership stays
        consistent.
        """
        if self.grouping is not None:
            if group is None:
                raise GroupingRequiredError("Features appended to a grouped FeatureSet need an owning group")
            group.add(feature)
        self.features.append(feature)

    def clear(self):
        """Remove all features and the grouping"""
        self.features = []
        self.ungroup()

    def sort(self):
        """
        Sort features by start, then end. If the set is grouped, features are sorted within each group, groups are
        sorted by span, and the feature list is rewritten as the concatenation of the groups.
        """
        if self.grouping is None:
            self.features.sort(key=feature_sort_key)
            return
        for group in self.grouping.groups:
            group.sort()
        self.grouping.groups.sort(key=group_sort_key)
        self.features = list(self.grouping.features())

    def ungroup(self):
        """Remove the grouping. Features are not affected."""
        self.grouping = None

    def _build_grouping(self, tag: str, keys: List[str], by_type: bool):
        grouping = Grouping(tag, by_type=by_type)
        lookup: Dict[str, FeatureGroup] = {}
        for feature, key in zip(self.features, keys):
            group = lookup.get(key)
            if group is None:
                group = FeatureGroup.from_feature(key, feature)
                lookup[key] = group
                grouping.groups.append(group)
            else:
                group.add(feature)
        self.grouping = grouping

    def group_by_tag(self, tag: str):
        """
        Group features by the value of ``tag`` in their attributes. Features with no value for the tag are placed in
        a single group named by the empty string.
        """
        self.ungroup()
        self._build_grouping(tag, [extract_tag_value(f.attribute, tag) for f in self.features], by_type=False)
        logger.debug(f"Grouped {len(self.features)} features into {len(self.grouping)} groups by {tag}")

    def group_by_type(self):
        """Group features by feature type."""
        self.ungroup()
        self._build_grouping(GROUP_BY_FEATURE_TAG, [f.type for f in self.features], by_type=True)

    def regroup(self):
        """Rebuild the current grouping from scratch, using the same criterion."""
        grouping = self.require_grouping("regroup")
        if grouping.by_type:
            self.group_by_type()
        else:
            self.group_by_tag(grouping.tag)

    def group_contiguous(self, tag: str):
        """
        Group contiguous features, e.g., an exon and its adjacent splice sites.

        A new run starts wherever there is a gap of at least one base, or the strand changes. If the set is
        already grouped (e.g., by transcript ID), runs are found within each group, and named by the outer group
        name plus a numeric suffix. Each feature gets ``<tag> "<name>"`` appended to its attribute, and the set is
        then regrouped by ``tag``. Features are sorted as a side effect, in a way that reflects the initial grouping.
        """
        self.sort()
        if self.grouping is None:
            outer = [(None, self.features)]
        else:
            outer = [(g.name, g.features) for g in self.grouping.groups]

        for name, features in outer:
            idx = 0
            last = None
            for feature in features:
                if last is None or feature.start > last.end + 1 or feature.strand != last.strand:
                    idx += 1

                if not feature.attribute or feature.attribute == NULL_COLUMN:
                    feature.attribute = ""
                else:
                    feature.attribute += ATTRIBUTE_SEPARATOR

                if name:
                    feature.attribute += f'{tag} "{name}.{idx}"'
                else:
                    feature.attribute += f'{tag} "{idx}"'

                if last is None or feature.end > last.end:
                    last = feature

        self.group_by_tag(tag)

    def group_index(self, feature: Feature) -> Tuple[int, int]:
        """
        Find the group that a feature belongs to.

        NOTE: This is a linear scan over every member of every group.

        Returns:
            A tuple of the index of the group and the position of the feature within that group.

        Raises:
            GroupingRequiredError: if the set is not grouped.
            GroupMembershipError: if the feature is not a member of any group.
        """
        grouping = self.require_grouping("group_index")
        for i, group in enumerate(grouping.groups):
            pos = group.index_of(feature)
            if pos is not None:
                return i, pos
        raise GroupMembershipError(f"{feature} is not a member of any group")

    def group_name(self, feature: Feature) -> str:
        """Name of the group a feature belongs to. Same cost as :meth:`group_index`."""
        idx, _ = self.group_index(feature)
        return self.grouping.groups[idx].name

    def filter_by_type(
        self, types: Iterable[str], exclude: bool = False, discards_handle: Optional[TextIO] = None
    ) -> List[Feature]:
        """
        Discard any feature whose type is not in ``types`` (or, if ``exclude``, whose type is in ``types``). If any
        feature is discarded the grouping is removed.

        Args:
            types: Feature types to keep.
            exclude: Drop the listed types instead of keeping them.
            discards_handle: Discarded features are written here as GFF, if given.

        Returns:
            The discarded features.
        """
        types = set(types)
        keepers = []
        discards = []
        for feature in self.features:
            if (feature.type in types) != exclude:
                keepers.append(feature)
            else:
                if discards_handle is not None:
                    write_feature(feature, discards_handle)
                discards.append(feature)
        self.features = keepers
        if discards:
            self.ungroup()
        return discards

    def filter_by_group(self, names: Iterable[str]):
        """Remove all groups whose names are not listed, and then regroup with the same criterion."""
        grouping = self.require_grouping("filter_by_group")
        names = set(names)
        self.features = [f for g in grouping.groups if g.name in names for f in g.features]
        self.regroup()

    def partition_by_type(self) -> Dict[str, List[Feature]]:
        """Partition features by type. Types appear in the order they are first seen."""
        partitions: Dict[str, List[Feature]] = {}
        for feature in self.features:
            partitions.setdefault(feature.type, []).append(feature)
        return partitions

    def add_gene_id(self):
        """Add a ``gene_id`` tag holding the group name to the front of every attribute. Some programs require it."""
        grouping = self.require_grouping("add_gene_id")
        for group in grouping.groups:
            for feature in group.features:
                feature.attribute = f'gene_id "{group.name}"{ATTRIBUTE_SEPARATOR}{feature.attribute}'

    def add_offset(self, offset: int, max_coord: Optional[int] = None):
        """
        Add ``offset`` to the start and end of every feature. Features that end up entirely before position 1, or
        entirely after ``max_coord``, are removed; features that are partially out of bounds are truncated to
        ``[1, max_coord]``. The grouping is removed.
        """
        keepers = []
        for feature in self.features:
            feature.start += offset
            feature.end += offset
            if feature.end < 1 or (max_coord is not None and feature.start > max_coord):
                continue
            feature.start = max(feature.start, 1)
            if max_coord is not None:
                feature.end = min(feature.end, max_coord)
            keepers.append(feature)
        self.features = keepers
        self.ungroup()

    def to_dict(self) -> dict:
        """Serialize through :class:`~gffset.io.models.FeatureSetModel`"""
        # avoid circular imports
        from inscripta.gffset.io.models import FeatureSetModel

        return FeatureSetModel.Schema().dump(FeatureSetModel.from_feature_set(self))

    @staticmethod
    def from_dict(vals: dict) -> "FeatureSet":
        from inscripta.gffset.io.models import FeatureSetModel

        return FeatureSetModel.Schema().load(vals).to_feature_set()
