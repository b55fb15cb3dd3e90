"""
Derive gene structure from the CDS and exon features of a grouped :class:`~gffset.gene.feature_set.FeatureSet`.

Every function here works one group at a time, and requires the set to be grouped (usually by transcript ID).
New features are copies of an existing member with a new type and coordinates; each is appended both to the set's
feature list and to the group it was derived from, so the grouping stays consistent. Call
:meth:`~gffset.gene.feature_set.FeatureSet.sort` afterwards to put new features into position order.

The strand of a group is the strand of its first member.
"""
import logging
import warnings
from dataclasses import dataclass
from typing import Iterable, Optional

from inscripta.gffset.gene.feature import feature_sort_key
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.gene.group import FeatureGroup
from inscripta.gffset.io.exc import DuplicateFeatureWarning
from inscripta.gffset.io.gff.constants import GFFFeatureTypes
from inscripta.gffset.location.strand import Strand

logger = logging.getLogger(__name__)

CODON_SIZE = 3
SPLICE_SITE_SIZE = 2


@dataclass(frozen=True)
class FeatureTypeNames:
    """The feature type names that are read and written when deriving features. Defaults follow GTF2."""

    cds: str = GFFFeatureTypes.CDS.value
    exon: str = GFFFeatureTypes.EXON.value
    start_codon: str = GFFFeatureTypes.START_CODON.value
    stop_codon: str = GFFFeatureTypes.STOP_CODON.value
    utr5: str = GFFFeatureTypes.UTR5.value
    utr3: str = GFFFeatureTypes.UTR3.value
    intron: str = GFFFeatureTypes.INTRON.value
    splice5: str = GFFFeatureTypes.SPLICE5.value
    splice3: str = GFFFeatureTypes.SPLICE3.value


DEFAULT_TYPE_NAMES = FeatureTypeNames()


def _group_strand(group: FeatureGroup) -> Optional[Strand]:
    return group.features[0].strand if group.features else None


def fix_start_stop(feature_set: FeatureSet, type_names: FeatureTypeNames = DEFAULT_TYPE_NAMES):
    """
    Adjust the coordinates of CDS features so that start codons are included and stop codons are excluded, as GTF2
    requires. A CDS is only adjusted if it is directly adjacent to the codon, and a stop codon is never excluded if
    that would leave the CDS with its end before its start.

    Assumes at most one start codon and at most one stop codon per group.
    """
    grouping = feature_set.require_grouping("fix_start_stop")
    for group in grouping.groups:
        starts = group.features_of_type(type_names.start_codon)
        stops = group.features_of_type(type_names.stop_codon)
        if len(starts) > 1 or len(stops) > 1:
            warnings.warn(
                DuplicateFeatureWarning(f"Group {group.name} has more than one start or stop codon; using the last")
            )
        start = starts[-1] if starts else None
        stop = stops[-1] if stops else None
        if start is None and stop is None:
            continue

        for cds in group.features_of_type(type_names.cds):
            if start is not None:
                if cds.strand == Strand.PLUS and cds.start == start.end + 1:
                    cds.start = start.start
                elif cds.strand == Strand.MINUS and cds.end == start.start - 1:
                    cds.end = start.end
            if stop is not None:
                if cds.strand == Strand.PLUS and cds.end == stop.end and stop.start - 1 >= cds.start:
                    cds.end = stop.start - 1
                elif cds.strand == Strand.MINUS and cds.start == stop.start and stop.end + 1 <= cds.end:
                    cds.start = stop.end + 1


def absorb_helpers(feature_set: FeatureSet, primary_types: Iterable[str], helper_types: Iterable[str]):
    """
    Extend features of "primary" types (e.g., CDS) to cover directly adjacent features of "helper" types (e.g.,
    start_codon). Features must be grouped and sorted. No features are created or removed; only coordinates, and the
    frames of extended primary features, change.

    Extending the 5' end of a feature by ``n`` bases moves its frame back by ``n`` modulo 3. This is done by adding
    ``2n``, a form of borrowing; it assumes a codon size of 3. On the plus strand the 5' end is the start; on the
    minus strand it is the end.
    """
    grouping = feature_set.require_grouping("absorb_helpers")
    primary_types = set(primary_types)
    helper_types = set(helper_types)

    for group in grouping.groups:
        members = group.features
        for j, feature in enumerate(members):
            if feature.type not in primary_types:
                continue

            for prev in reversed(members[:j]):
                if prev.type not in helper_types or prev.end != feature.start - 1:
                    break
                feature.start = prev.start
                if feature.strand == Strand.PLUS:
                    feature.frame = feature.frame.shift(2 * prev.length)

            for nxt in members[j + 1 :]:
                if nxt.type not in helper_types or nxt.start != feature.end + 1:
                    break
                feature.end = nxt.end
                if feature.strand == Strand.MINUS:
                    feature.frame = feature.frame.shift(2 * nxt.length)


def create_utrs(feature_set: FeatureSet, type_names: FeatureTypeNames = DEFAULT_TYPE_NAMES):
    """
    Create 5' and 3' UTR features wherever exon features extend beyond the CDS features of the same group. Groups
    without any CDS are skipped.
    """
    grouping = feature_set.require_grouping("create_utrs")
    for group in grouping.groups:
        cds = group.features_of_type(type_names.cds)
        if not cds:
            continue
        cds_start = min(f.start for f in cds)
        cds_end = max(f.end for f in cds)
        minus = _group_strand(group) == Strand.MINUS

        for exon in group.features_of_type(type_names.exon):
            if exon.start < cds_start:
                feature_set.append(
                    exon.copy(
                        type=type_names.utr3 if minus else type_names.utr5,
                        end=min(exon.end, cds_start - 1),
                    ),
                    group,
                )
            if exon.end > cds_end:
                feature_set.append(
                    exon.copy(
                        type=type_names.utr5 if minus else type_names.utr3,
                        start=max(exon.start, cds_end + 1),
                    ),
                    group,
                )


def create_introns(feature_set: FeatureSet, type_names: FeatureTypeNames = DEFAULT_TYPE_NAMES):
    """
    Create intron features between consecutive exons of the same group. Each intron is a copy of the upstream (in
    position order) exon. Exons that abut or overlap have no intron between them.
    """
    grouping = feature_set.require_grouping("create_introns")
    for group in grouping.groups:
        exons = sorted(group.features_of_type(type_names.exon), key=feature_sort_key)
        for exon1, exon2 in zip(exons, exons[1:]):
            if exon2.start - 1 < exon1.end + 1:
                logger.warning(f"Exons {exon1} and {exon2} in group {group.name} leave no room for an intron")
                continue
            feature_set.append(
                exon1.copy(type=type_names.intron, start=exon1.end + 1, end=exon2.start - 1),
                group,
            )


def create_signals(feature_set: FeatureSet, type_names: FeatureTypeNames = DEFAULT_TYPE_NAMES):
    """
    Create features for start and stop codons and for 5' and 3' splice sites.

    Codons are the 3 bases at either end of the coding region. Stop codons are removed from the CDS they are carved
    out of, and get the frame the CDS has after trimming, advanced by the trimmed length. CDS features shorter than 3
    bases produce no codons.

    Splice sites are the 2 bases flanking each CDS or UTR boundary that is not the edge of the coding region or of
    the transcript. Splice sites inside UTRs are only created if the UTRs are annotated (see :func:`create_utrs`).
    """
    grouping = feature_set.require_grouping("create_signals")
    utr_types = {type_names.utr5, type_names.utr3}

    for group in grouping.groups:
        cds_start = cds_end = trans_start = trans_end = None
        for f in group.features:
            if f.type == type_names.cds:
                cds_start = f.start if cds_start is None else min(cds_start, f.start)
                cds_end = f.end if cds_end is None else max(cds_end, f.end)
            if f.type == type_names.cds or f.type in utr_types:
                trans_start = f.start if trans_start is None else min(trans_start, f.start)
                trans_end = f.end if trans_end is None else max(trans_end, f.end)
        minus = _group_strand(group) == Strand.MINUS
        before_cds = cds_start - 1 if cds_start is not None else None
        after_cds = cds_end + 1 if cds_end is not None else None

        for f in list(group.features):
            is_cds = f.type == type_names.cds
            is_utr = f.type in utr_types

            if is_cds and f.length >= CODON_SIZE:
                if f.start == cds_start:
                    codon = f.copy(end=f.start + CODON_SIZE - 1)
                    if minus:
                        codon.type = type_names.stop_codon
                        f.start += CODON_SIZE
                        codon.frame = f.frame.shift(f.length)
                    else:
                        codon.type = type_names.start_codon
                    feature_set.append(codon, group)
                if f.end == cds_end:
                    codon = f.copy(start=f.end - CODON_SIZE + 1)
                    if minus:
                        codon.type = type_names.start_codon
                    else:
                        codon.type = type_names.stop_codon
                        f.end -= CODON_SIZE
                        codon.frame = f.frame.shift(f.length)
                    feature_set.append(codon, group)

            # splice site before this block
            if (is_cds and f.start not in (cds_start, cds_start + CODON_SIZE)) or (
                is_utr and f.start != trans_start and f.start != after_cds
            ):
                feature_set.append(
                    f.copy(
                        type=type_names.splice5 if minus else type_names.splice3,
                        start=f.start - SPLICE_SITE_SIZE,
                        end=f.start - 1,
                    ),
                    group,
                )

            # splice site after this block
            if (is_cds and f.end not in (cds_end, cds_end - CODON_SIZE)) or (
                is_utr and f.end != before_cds and f.end != trans_end
            ):
                feature_set.append(
                    f.copy(
                        type=type_names.splice3 if minus else type_names.splice5,
                        start=f.end + 1,
                        end=f.end + SPLICE_SITE_SIZE,
                    ),
                    group,
                )
