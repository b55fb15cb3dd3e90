import re

from inscripta.gffset.util.enum import HasMemberMixin

NULL_COLUMN = "."
GFF_MIN_COLUMNS = 5
GFF_COLUMNS = 9
DEFAULT_GFF_VERSION = "2"
COLUMN_SEPARATOR = "\t"
COMMENT_PREFIX = "#"
METADATA_PREFIX = "##"
SCORE_FORMAT = "{:.3f}"
ATTRIBUTE_SEPARATOR = " ; "
GROUP_BY_FEATURE_TAG = "feature"

# ##<tag> <value1> [<value2>]
METADATA_REGEX = re.compile(r"^\s*##\s*(\S+)\s+(\S+)(\s+(\S+))?")

# integer columns; plain decimal digits with an optional sign
INTEGER_REGEX = re.compile(r"^[+-]?[0-9]+$")

# score column; decimal or exponent notation
FLOAT_REGEX = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")

# UCSC browser style position, e.g. chr10:102553847-102554897+
GENOMIC_POSITION_REGEX = re.compile(r"(chr[_a-zA-Z0-9]+):([0-9]+)-([0-9]+)([-+])?")


class GFFMetadataTags(HasMemberMixin):
    """The ``##`` header lines that are understood. All other header lines are ignored."""

    GFF_VERSION = "gff-version"
    SOURCE_VERSION = "source-version"
    DATE = "date"


class GFFFeatureTypes(HasMemberMixin):
    """Feature types that have special meaning when deriving gene structure."""

    CDS = "CDS"
    EXON = "exon"
    START_CODON = "start_codon"
    STOP_CODON = "stop_codon"
    UTR5 = "5'UTR"
    UTR3 = "3'UTR"
    INTRON = "intron"
    SPLICE5 = "5'splice"
    SPLICE3 = "3'splice"
