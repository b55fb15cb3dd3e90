"""
Functions for writing GFF.
"""
from typing import Iterable, TextIO

from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.io.gff.constants import GFFMetadataTags
from inscripta.gffset.io.gff.rows import GFFRow


def feature_to_gff_row(feature: Feature) -> GFFRow:
    """Convert a Feature to a :class:`GFFRow`. The frame is converted back to the external representation."""
    return GFFRow(
        feature.seqname,
        feature.source,
        feature.type,
        feature.start,
        feature.end,
        feature.score,
        feature.strand,
        feature.frame.to_phase(),
        feature.attribute,
    )


def write_feature(feature: Feature, gff_handle: TextIO):
    """Write a single Feature as one GFF line."""
    print(feature_to_gff_row(feature), file=gff_handle)


def write_features(features: Iterable[Feature], gff_handle: TextIO):
    for feature in features:
        write_feature(feature, gff_handle)


def feature_set_to_gff(feature_set, gff_handle: TextIO):
    """
    Write a :class:`~gffset.gene.feature_set.FeatureSet` to GFF. Metadata header lines are only written for
    metadata that is set.

    Args:
        feature_set: The FeatureSet to write.
        gff_handle: Open file handle to write to.
    """
    if feature_set.gff_version:
        print(f"##{GFFMetadataTags.GFF_VERSION.value} {feature_set.gff_version}", file=gff_handle)
    if feature_set.source_version:
        print(
            f"##{GFFMetadataTags.SOURCE_VERSION.value} {feature_set.source} {feature_set.source_version}",
            file=gff_handle,
        )
    if feature_set.date:
        print(f"##{GFFMetadataTags.DATE.value} {feature_set.date}", file=gff_handle)
    write_features(feature_set.features, gff_handle)
