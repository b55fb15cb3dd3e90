import random
from io import StringIO

from inscripta.gffset.gene.cds_frame import CDSFrame
from inscripta.gffset.gene.derived import create_introns, create_signals, create_utrs
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.gene.flatten import flatten, flatten_within_groups
from inscripta.gffset.gene.overlap import remove_overlaps
from inscripta.gffset.io.gff.parser import parse_gff
from inscripta.gffset.io.gff.writer import feature_set_to_gff
from inscripta.gffset.location.ranges import RangeCursor, subset_range_overlap_sorted
from inscripta.gffset.location.strand import Strand

N_TRANSCRIPTS = 2000
SEED = 1234


def synthetic_transcripts(n_transcripts: int = N_TRANSCRIPTS, seed: int = SEED) -> FeatureSet:
    """Overlapping three exon transcripts with CDS, in random order."""
    rng = random.Random(seed)
    features = []
    for i in range(n_transcripts):
        start = rng.randint(1, n_transcripts * 500)
        strand = rng.choice([Strand.PLUS, Strand.MINUS])
        attribute = f'gene_id "g{i}"; transcript_id "t{i}";'
        pos = start
        for _ in range(3):
            exon_len = rng.randint(50, 400)
            features.append(
                Feature("chr1", "bench", "exon", pos, pos + exon_len - 1, strand=strand, attribute=attribute)
            )
            features.append(
                Feature(
                    "chr1",
                    "bench",
                    "CDS",
                    pos + 10,
                    pos + exon_len - 11,
                    score=rng.random(),
                    strand=strand,
                    frame=CDSFrame.ZERO,
                    attribute=attribute,
                )
            )
            pos += exon_len + rng.randint(20, 1000)
    rng.shuffle(features)
    return FeatureSet(features)


class SortFeatures:
    def setup(self):
        self.feature_set = synthetic_transcripts()
        self.grouped = synthetic_transcripts()
        self.grouped.group_by_tag("transcript_id")

    def time_sort_ungrouped(self):
        self.feature_set.sort()

    def time_sort_grouped(self):
        self.grouped.sort()

    def time_group_by_tag(self):
        self.feature_set.group_by_tag("transcript_id")


class RemoveOverlaps:
    repeat = (1, 10, 10.0)

    def setup(self):
        self.feature_set = synthetic_transcripts()
        self.feature_set.group_by_tag("transcript_id")
        self.feature_set.sort()

    def time_remove_overlaps(self):
        remove_overlaps(self.feature_set)


class Flatten:
    repeat = (1, 10, 10.0)

    def setup(self):
        self.feature_set = synthetic_transcripts()
        self.feature_set.filter_by_type(["exon"])
        self.feature_set.sort()
        self.grouped = synthetic_transcripts()
        self.grouped.filter_by_type(["exon"])
        self.grouped.group_by_tag("transcript_id")
        self.grouped.sort()

    def time_flatten(self):
        flatten(self.feature_set)

    def time_flatten_within_groups(self):
        flatten_within_groups(self.grouped)


class DeriveStructure:
    repeat = (1, 10, 10.0)

    def setup(self):
        self.feature_set = synthetic_transcripts()
        self.feature_set.group_by_tag("transcript_id")
        self.feature_set.sort()

    def time_create_utrs_introns_signals(self):
        create_utrs(self.feature_set)
        create_introns(self.feature_set)
        create_signals(self.feature_set)


class RangeQueries:
    def setup(self):
        self.feature_set = synthetic_transcripts()
        self.feature_set.sort()

    def time_sweep(self):
        cursor = RangeCursor()
        for start in range(1, N_TRANSCRIPTS * 500, 5000):
            subset_range_overlap_sorted(self.feature_set, start, start + 4999, cursor)


class ParseWriteGFF:
    repeat = (1, 5, 20.0)

    def setup(self):
        handle = StringIO()
        feature_set_to_gff(synthetic_transcripts(), handle)
        self.text = handle.getvalue()

    def time_parse_gff(self):
        parse_gff(StringIO(self.text))

    def mem_parse_gff(self):
        return parse_gff(StringIO(self.text))

    def time_write_gff(self):
        feature_set_to_gff(parse_gff(StringIO(self.text)), StringIO())
