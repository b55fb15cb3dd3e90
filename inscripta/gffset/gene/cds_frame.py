from enum import Enum

from inscripta.gffset.exc import InvalidFrameError
from inscripta.gffset.io.gff.constants import INTEGER_REGEX


class CDSPhase(Enum):
    """
    The value found in column 8 of a GFF record. This is the *external* representation; it is never stored on a
    :class:`~gffset.gene.feature.Feature` directly. From the GFF specification:

    The phase is one of the integers 0, 1, or 2, indicating the number of bases forward from the start of the
    current CDS feature the next codon begins. A phase of "0" indicates that a codon begins on the first nucleotide
    of the CDS feature (i.e. 0 bases forward), a phase of "1" indicates that the codon begins at the second nucleotide
    of this CDS feature and a phase of "2" indicates that the codon begins at the third nucleotide of this region.
    """

    NONE = -1
    ZERO = 0
    ONE = 1
    TWO = 2

    @staticmethod
    def from_int(value: int) -> "CDSPhase":
        if value not in (0, 1, 2):
            raise InvalidFrameError(f"Phase must be one of 0, 1 or 2, not {value}")
        return CDSPhase(value)

    @staticmethod
    def from_gff(value: str) -> "CDSPhase":
        """Parses column 8 of a GFF record. A period is the null phase; raises ValueError on non-integers."""
        if value == ".":
            return CDSPhase.NONE
        if not INTEGER_REGEX.match(value):
            raise ValueError(f"{value} is not an integer")
        return CDSPhase.from_int(int(value))

    def to_frame(self) -> "CDSFrame":
        """Converts to the internal representation, ``(3 - phase) % 3``"""
        if self is CDSPhase.NONE:
            return CDSFrame.NONE
        return CDSFrame((3 - self.value) % 3)

    def to_gff(self) -> str:
        """In GFF format, Phase is represented with a period for NONE"""
        if self == CDSPhase.NONE:
            return "."
        return str(self.value)


class CDSFrame(Enum):
    """
    The internal representation of a reading frame. It is related to the GFF column by ``(3 - phase) % 3``, which is
    its own inverse on ``{0, 1, 2}``, so the same formula converts back on output.

    Frames are easy to do arithmetic with: extending or trimming a CDS by ``n`` bases on its 5' side changes the
    frame by ``n`` modulo 3. Subtraction is done by adding the complement, ``x - y == x + 2y (mod 3)``.
    """

    NONE = -1
    ZERO = 0
    ONE = 1
    TWO = 2

    @staticmethod
    def from_int(value: int) -> "CDSFrame":
        return CDSFrame(value)

    @property
    def is_null(self) -> bool:
        return self is CDSFrame.NONE

    def shift(self, shift: int) -> "CDSFrame":
        if self is CDSFrame.NONE:
            return self
        return CDSFrame.from_int((self.value + shift) % 3)

    def to_phase(self) -> CDSPhase:
        """Converts back to the external representation"""
        if self is CDSFrame.NONE:
            return CDSPhase.NONE
        return CDSPhase((3 - self.value) % 3)
