"""
Read features from General Feature Format (GFF) text.

Only the first five columns (``seqname``, ``source``, ``feature``, ``start`` and ``end``) are required. The remaining
columns (``score``, ``strand``, ``frame`` and ``attribute``) are optional; they default to a null score, the null
strand ``.``, a null frame and an empty attribute. Columns must be separated by tabs.

Comments and blank lines are ignored. ``##`` lines that appear before the first record are treated as metadata;
``gff-version``, ``source-version`` and ``date`` are recognized and everything else is ignored.

Malformed records raise :class:`~gffset.io.gff.exc.GFFParserError` immediately, reporting the line number. A broken
record means a broken upstream step, so nothing is skipped or repaired.
"""
import logging
from pathlib import Path
from typing import List, TextIO, Union, Optional

from inscripta.gffset.exc import InvalidFrameError
from inscripta.gffset.gene.cds_frame import CDSPhase
from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.io.gff.constants import (
    COLUMN_SEPARATOR,
    COMMENT_PREFIX,
    FLOAT_REGEX,
    GFF_MIN_COLUMNS,
    INTEGER_REGEX,
    METADATA_PREFIX,
    METADATA_REGEX,
    NULL_COLUMN,
    GFFMetadataTags,
)
from inscripta.gffset.io.gff.exc import GFFParserError
from inscripta.gffset.location.strand import Strand

logger = logging.getLogger(__name__)


def _parse_metadata(line: str, feature_set: FeatureSet):
    match = METADATA_REGEX.match(line)
    if match is None:
        return
    tag, value1, _, value2 = match.groups()
    member = GFFMetadataTags.from_value_nocase(tag)
    if member is GFFMetadataTags.GFF_VERSION:
        feature_set.gff_version = value1
    elif member is GFFMetadataTags.SOURCE_VERSION and value2 is not None:
        feature_set.source = value1
        feature_set.source_version = value2
    elif member is GFFMetadataTags.DATE:
        feature_set.date = value1


def _parse_int(value: str, column: str, line_number: int) -> int:
    if not INTEGER_REGEX.match(value):
        raise GFFParserError(f"non-numeric '{column}' value ('{value}')", line_number)
    return int(value)


def parse_gff_record(columns: List[str], line_number: Optional[int] = None) -> Feature:
    """
    Build a Feature from the tab-separated columns of one record.

    Raises:
        GFFParserError: on too few columns, non-numeric coordinates or score, or an illegal strand or frame.
    """
    if len(columns) < GFF_MIN_COLUMNS:
        raise GFFParserError(f"minimum of {GFF_MIN_COLUMNS} columns are required", line_number)

    start = _parse_int(columns[3], "start", line_number)
    end = _parse_int(columns[4], "end", line_number)

    score = None
    if len(columns) > 5 and columns[5] != NULL_COLUMN:
        if not FLOAT_REGEX.match(columns[5]):
            raise GFFParserError(f"non-numeric and non-null 'score' value ('{columns[5]}')", line_number)
        score = float(columns[5])

    strand = Strand.UNSTRANDED
    if len(columns) > 6:
        try:
            strand = Strand.from_symbol(columns[6])
        except ValueError:
            raise GFFParserError(f"illegal 'strand' ('{columns[6]}')", line_number)

    phase = CDSPhase.NONE
    if len(columns) > 7:
        try:
            phase = CDSPhase.from_gff(columns[7])
        except (ValueError, InvalidFrameError):
            raise GFFParserError(f"illegal 'frame' ('{columns[7]}')", line_number)

    attribute = columns[8] if len(columns) > 8 else ""

    return Feature(
        columns[0],
        columns[1],
        columns[2],
        start,
        end,
        score=score,
        strand=strand,
        frame=phase.to_frame(),
        attribute=attribute,
    )


def parse_gff(gff_handle: TextIO) -> FeatureSet:
    """
    Read a set of features from an open text handle, until end of file.

    Args:
        gff_handle: Open file handle in text mode, or any iterable of lines.

    Returns:
        A new, ungrouped :class:`~gffset.gene.feature_set.FeatureSet` in file order.

    Raises:
        GFFParserError: if any record is malformed.
    """
    feature_set = FeatureSet()
    done_with_header = False
    for line_number, line in enumerate(gff_handle, start=1):
        line = line.strip()
        if not line:
            continue

        if not done_with_header and line.startswith(METADATA_PREFIX):
            _parse_metadata(line, feature_set)
            continue
        elif line.startswith(COMMENT_PREFIX):
            continue

        done_with_header = True
        feature_set.features.append(parse_gff_record(line.split(COLUMN_SEPARATOR), line_number))

    logger.info(f"Parsed {len(feature_set)} features")
    return feature_set


def parse_gff_file(gff: Union[str, Path]) -> FeatureSet:
    """Convenience function that opens a GFF file and calls :func:`parse_gff`."""
    with open(gff, "r") as fh:
        return parse_gff(fh)
