from enum import Enum
from functools import total_ordering


@total_ordering
class Strand(Enum):
    PLUS = 1
    MINUS = -1
    UNSTRANDED = 0

    def __str__(self):
        return str(self.to_symbol())

    @staticmethod
    def from_symbol(value: str) -> "Strand":
        """Converts the GFF representation of a strand to a Strand"""
        if value == "+":
            return Strand.PLUS
        if value == "-":
            return Strand.MINUS
        if value == ".":
            return Strand.UNSTRANDED
        raise ValueError("{} is not a valid string representation of a strand".format(value))

    def to_symbol(self) -> str:
        if self == Strand.PLUS:
            return "+"
        if self == Strand.MINUS:
            return "-"
        return "."

    @staticmethod
    def from_int(value: int) -> "Strand":
        """Converts integer representation of a strand to a Strand"""
        return Strand(value)  # Raises ValueError for invalid int

    @staticmethod
    def _order():
        return {Strand.PLUS: 1, Strand.MINUS: 2, Strand.UNSTRANDED: 3}

    def __lt__(self, other):
        if not type(other) is Strand:
            raise ValueError("Cannot compare {} to {}".format(type(self).__name__, type(other).__name__))
        order = Strand._order()
        return order[self] < order[other]

    def reverse(self) -> "Strand":
        """Returns the opposite of this Strand. Unstranded stays unstranded."""
        if self == Strand.PLUS:
            return Strand.MINUS
        if self == Strand.MINUS:
            return Strand.PLUS
        return Strand.UNSTRANDED
