"""
Object representation of a single GFF record.
"""
from dataclasses import dataclass, replace
from typing import Optional

from inscripta.gffset.gene.cds_frame import CDSFrame
from inscripta.gffset.io.exc import InvalidInputError
from inscripta.gffset.io.gff.constants import GENOMIC_POSITION_REGEX
from inscripta.gffset.location.strand import Strand


@dataclass(eq=False)
class Feature:
    """
    A single annotated interval on a named sequence.

    Coordinates are 1-based and inclusive. ``start <= end`` is not enforced here, but every transform assumes it.

    A score of ``None`` means the record had no score, which is not the same thing as a score of zero. The frame is
    stored in the internal representation (see :class:`~gffset.gene.cds_frame.CDSFrame`); conversion to and from
    the GFF column happens at the I/O boundary.

    Features compare by identity. Groups hold references to the same Feature objects that the owning
    :class:`~gffset.gene.feature_set.FeatureSet` holds, and membership tests must not confuse two distinct
    records that happen to have the same values. Use :meth:`same_as` to compare values.
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

    def __repr__(self):
        return (
            f"Feature({self.seqname}:{self.start}-{self.end}:{self.strand.to_symbol()}, type={self.type}, "
            f"score={self.score}, frame={self.frame.name})"
        )

    @property
    def score_is_null(self) -> bool:
        return self.score is None

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def copy(self, **changes) -> "Feature":
        """Returns an independent copy of this Feature, with any keyword arguments replacing the copied values."""
        return replace(self, **changes)

    def same_as(self, other: "Feature") -> bool:
        """Value equality over all nine GFF columns."""
        return (
            self.seqname == other.seqname
            and self.source == other.source
            and self.type == other.type
            and self.start == other.start
            and self.end == other.end
            and self.score == other.score
            and self.strand == other.strand
            and self.frame == other.frame
            and self.attribute == other.attribute
        )

    def overlaps(self, start: int, end: int) -> bool:
        """Does this feature intersect the closed interval ``[start, end]``?"""
        return self.start <= end and self.end >= start

    def is_contained_in(self, start: int, end: int) -> bool:
        return self.start >= start and self.end <= end

    @staticmethod
    def from_genomic_position(
        position: str,
        source: str,
        feature_type: str,
        score: Optional[float] = None,
        frame: CDSFrame = CDSFrame.NONE,
        attribute: str = "",
    ) -> "Feature":
        """
        Build a Feature from a genome browser position string such as ``chr10:102553847-102554897``. A trailing
        ``+`` or ``-`` is interpreted as the strand; otherwise the feature is unstranded.

        Raises:
            InvalidInputError: if the position string cannot be parsed.
        """
        match = GENOMIC_POSITION_REGEX.search(position)
        if match is None:
            raise InvalidInputError(f"Could not parse genomic position '{position}'")
        seqname, start, end, strand = match.groups()
        return Feature(
            seqname,
            source,
            feature_type,
            int(start),
            int(end),
            score=score,
            strand=Strand.from_symbol(strand) if strand else Strand.UNSTRANDED,
            frame=frame,
            attribute=attribute,
        )


def feature_sort_key(feature: Feature):
    """Features sort by start, then end. This puts short features that overlap the ends of longer ones in a
    sensible order."""
    return feature.start, feature.end
