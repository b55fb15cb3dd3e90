"""
Test serializing FeatureSets to dictionaries and back through FeatureSetModel.
"""
import json

import pytest

from inscripta.gffset.gene.cds_frame import CDSFrame
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.io.gff.parser import parse_gff_file
from inscripta.gffset.io.models import FeatureModel, FeatureSetModel
from inscripta.gffset.location.strand import Strand


@pytest.fixture
def feature_set(test_data_dir):
    return parse_gff_file(test_data_dir / "transcripts.gtf")


class TestFeatureModel:
    def test_round_trip(self):
        feature = Feature("chr1", "src", "CDS", 1, 10, 2.5, Strand.MINUS, CDSFrame.TWO, 'transcript_id "t1"')
        dumped = FeatureModel.Schema().dump(FeatureModel.from_feature(feature))
        assert dumped["start"] == 1
        assert dumped["score"] == 2.5
        loaded = FeatureModel.Schema().load(dumped).to_feature()
        assert loaded.same_as(feature)

    def test_null_score(self):
        feature = Feature("chr1", "src", "exon", 1, 10)
        loaded = FeatureModel.Schema().load(FeatureModel.Schema().dump(FeatureModel.from_feature(feature)))
        assert loaded.score is None
        assert loaded.frame == CDSFrame.NONE

    def test_defaults(self):
        loaded = FeatureModel.Schema().load(dict(seqname="chr1", source="src", type="exon", start=1, end=10))
        feature = loaded.to_feature()
        assert feature.strand == Strand.UNSTRANDED
        assert feature.attribute == ""


class TestFeatureSetModel:
    def test_ungrouped(self, feature_set):
        vals = feature_set.to_dict()
        assert vals["gff_version"] == "2"
        assert vals["source"] == "genepred"
        assert vals["group_tag"] is None
        loaded = FeatureSet.from_dict(vals)
        assert not loaded.is_grouped
        assert all(a.same_as(b) for a, b in zip(feature_set, loaded))
        assert loaded.date == "2019-3-7"

    def test_grouped_by_tag(self, feature_set):
        feature_set.group_by_tag("transcript_id")
        loaded = FeatureSet.from_dict(feature_set.to_dict())
        assert loaded.group_tag == "transcript_id"
        assert loaded.grouping.names == ["t1", "t2", "t3"]
        assert [len(g) for g in loaded.groups] == [4, 1, 2]

    def test_grouped_by_type(self, feature_set):
        feature_set.group_by_type()
        loaded = FeatureSet.from_dict(feature_set.to_dict())
        assert loaded.grouping.by_type
        assert loaded.grouping.names == ["exon", "CDS"]

    def test_sorted_groups_rebuilt_in_order(self, feature_set):
        feature_set.group_by_tag("transcript_id")
        feature_set.sort()
        names = feature_set.grouping.names
        loaded = FeatureSet.from_dict(feature_set.to_dict())
        assert loaded.grouping.names == names

    def test_json_serializable(self, feature_set):
        feature_set.group_by_tag("transcript_id")
        vals = json.loads(json.dumps(feature_set.to_dict()))
        loaded = FeatureSetModel.Schema().load(vals).to_feature_set()
        assert len(loaded) == len(feature_set)
        assert loaded.features[1].frame == CDSFrame.ZERO

    def test_empty(self):
        loaded = FeatureSet.from_dict(FeatureSet().to_dict())
        assert len(loaded) == 0
        assert loaded.gff_version == ""
