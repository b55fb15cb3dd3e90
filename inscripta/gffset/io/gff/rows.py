"""
Contains information on how to render a GFF row.
"""
from dataclasses import dataclass
from typing import Optional

from inscripta.gffset.gene.cds_frame import CDSPhase
from inscripta.gffset.io.gff.constants import NULL_COLUMN, SCORE_FORMAT, COLUMN_SEPARATOR
from inscripta.gffset.location.strand import Strand


@dataclass
class GFFRow:
    """
    Stores the contents of a GFF row in its external representation. From the format description:

     * Column 1: ``seqname``
    The name of the sequence. Having an explicit sequence name allows a feature file to be prepared for a data set of
    multiple sequences.

     * Column 2: ``source``
    The source of this feature. This field will normally be used to indicate the program making the prediction, or if
    it comes from public database annotation, or is experimentally verified, etc.

     * Column 3: ``feature``
    The feature type name. Types with special meaning when deriving gene structure are listed in
    :class:`~gffset.io.gff.constants.GFFFeatureTypes`.

     * Columns 4 & 5: ``start`` and ``end``
    Integers. ``start`` must be less than or equal to ``end``. Sequence numbering starts at 1.

     * Column 6: ``score``
    A floating point value. When there is no score, a period is written.

     * Column 7: ``strand``
    One of ``+``, ``-`` or ``.``. ``.`` should be used when strand is not relevant.

     * Column 8: ``frame``
    One of ``0``, ``1``, ``2`` or ``.``. ``0`` indicates that the feature begins with a whole codon at the 5' most
    base, ``1`` that there is one extra base (the third base of a codon) before the first whole codon and ``2`` that
    there are two extra bases (the second and third bases of the codon) before the first codon. ``.`` means frame is
    not relevant.

     * Column 9: ``attribute``
    Free text. Typically ``tag value`` pairs separated by semicolons.
    """

    seqname: str
    source: str
    type: str
    start: int
    end: int
    score: Optional[float]
    strand: Strand
    phase: CDSPhase
    attribute: str

    def __str__(self) -> str:
        return COLUMN_SEPARATOR.join(
            (
                str(x)
                for x in [
                    self.seqname,
                    self.source,
                    self.type,
                    self.start,
                    self.end,
                    NULL_COLUMN if self.score is None else SCORE_FORMAT.format(self.score),
                    self.strand.to_symbol(),
                    self.phase.to_gff(),
                    self.attribute,
                ]
            )
        )
