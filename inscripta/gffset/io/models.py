"""
Data models. These models allow for validation of inputs to a GFFSet model, acting as a JSON schema for serializing
and deserializing feature sets.
"""
from typing import List, Optional, ClassVar, Type

from marshmallow import Schema  # noqa: F401
from marshmallow_dataclass import dataclass

from inscripta.gffset.gene.cds_frame import CDSFrame
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.location.strand import Strand


@dataclass
class BaseModel:
    """Base for all of the models."""

    Schema: ClassVar[Type[Schema]] = Schema  # noqa: F811

    class Meta:
        ordered = True


@dataclass
class FeatureModel(BaseModel):
    """Data model that allows construction of a :class:`~gffset.gene.feature.Feature` object.

    ``frame`` is the internal frame, not the GFF column value.
    """

    seqname: str
    source: str
    type: str
    start: int
    end: int
    score: Optional[float] = None
    strand: Strand = Strand.UNSTRANDED
    frame: CDSFrame = CDSFrame.NONE
    attribute: str = ""

    def to_feature(self) -> Feature:
        return Feature(
            self.seqname,
            self.source,
            self.type,
            self.start,
            self.end,
            score=self.score,
            strand=self.strand,
            frame=self.frame,
            attribute=self.attribute,
        )

    @staticmethod
    def from_feature(feature: Feature) -> "FeatureModel":
        return FeatureModel(
            seqname=feature.seqname,
            source=feature.source,
            type=feature.type,
            start=feature.start,
            end=feature.end,
            score=feature.score,
            strand=feature.strand,
            frame=feature.frame,
            attribute=feature.attribute,
        )


@dataclass
class FeatureSetModel(BaseModel):
    """
    Data model that allows construction of a :class:`~gffset.gene.feature_set.FeatureSet` object.

    Groups are not stored directly. If ``group_tag`` is set, the set is regrouped on construction: by feature type
    if ``group_by_type`` is set, otherwise by the tag. Regrouping from file order recreates groups in the same order,
    with the same members.
    """

    features: List[FeatureModel]
    gff_version: Optional[str] = None
    source: Optional[str] = None
    source_version: Optional[str] = None
    date: Optional[str] = None
    group_tag: Optional[str] = None
    group_by_type: Optional[bool] = None

    def to_feature_set(self) -> FeatureSet:
        feature_set = FeatureSet(
            [f.to_feature() for f in self.features],
            gff_version=self.gff_version or "",
            source=self.source or "",
            source_version=self.source_version or "",
            date=self.date or "",
        )
        if self.group_by_type:
            feature_set.group_by_type()
        elif self.group_tag is not None:
            feature_set.group_by_tag(self.group_tag)
        return feature_set

    @staticmethod
    def from_feature_set(feature_set: FeatureSet) -> "FeatureSetModel":
        grouping = feature_set.grouping
        return FeatureSetModel(
            features=[FeatureModel.from_feature(f) for f in feature_set.features],
            gff_version=feature_set.gff_version or None,
            source=feature_set.source or None,
            source_version=feature_set.source_version or None,
            date=feature_set.date or None,
            group_tag=grouping.tag if grouping else None,
            group_by_type=grouping.by_type if grouping and grouping.by_type else None,
        )
