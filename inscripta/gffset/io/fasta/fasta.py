"""
Functions for pairing features with sequence. Sequences are handled as Biopython :class:`SeqRecord` objects keyed by
sequence name, which is how features refer to them.
"""
from typing import Dict, TextIO, Optional

from Bio import SeqIO
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from inscripta.gffset.gene.feature import Feature
from inscripta.gffset.gene.feature_set import FeatureSet
from inscripta.gffset.io.fasta.exc import FastaExportError
from inscripta.gffset.location.ranges import reverse_complement
from inscripta.gffset.location.strand import Strand


def fasta_to_seqrecords(fasta_handle: TextIO) -> Dict[str, SeqRecord]:
    """Parser that converts a FASTA to a dictionary of SeqRecords, with sequence names as keys.

    Args:
        fasta_handle: Open file handle in text mode.

    Returns:
        Dictionary mapping the name of each sequence to its :class:`SeqRecord`.
    """
    return {rec.id: rec for rec in SeqIO.parse(fasta_handle, format="fasta")}


def extract_feature_sequence(feature: Feature, seqrecord: SeqRecord) -> Seq:
    """
    The sequence covered by a feature. Minus strand features are reverse complemented, so the sequence always reads
    5' to 3' on the feature's strand.

    Raises:
        FastaExportError: if the feature runs past the end of the sequence.
    """
    if feature.start < 1 or feature.end > len(seqrecord):
        raise FastaExportError(f"{feature} is outside of sequence {seqrecord.id} of length {len(seqrecord)}")
    seq = seqrecord.seq[feature.start - 1 : feature.end]
    if feature.strand == Strand.MINUS:
        return seq.reverse_complement()
    return seq


def reverse_complement_region(feature_set: FeatureSet, seqrecord: SeqRecord, start: int, end: int) -> SeqRecord:
    """
    Reverse complement the region ``[start, end]`` of a sequence, and transform the features of ``feature_set`` to
    match (see :func:`~gffset.location.ranges.reverse_complement`). Both must use the same coordinates.

    The grouping of ``feature_set``, if any, is removed, since group spans no longer match the transformed
    features. Regroup the set to restore it.

    Returns:
        A new SeqRecord holding the reverse complemented region, with the same ID as ``seqrecord``.
    """
    if start < 1 or end > len(seqrecord) or end < start:
        raise FastaExportError(f"Region {start}-{end} is outside of sequence {seqrecord.id}")
    region = seqrecord[start - 1 : end].reverse_complement(id=True, name=True, description=True)
    reverse_complement(feature_set.features, start, end)
    feature_set.ungroup()
    return region


def feature_set_to_fasta(
    feature_set: FeatureSet,
    seqrecords: Dict[str, SeqRecord],
    fasta_file_handle: TextIO,
    feature_type: Optional[str] = None,
):
    """
    Write the sequence of every feature in a FeatureSet to FASTA. Records are named ``seqname:start-end(strand)``.

    Args:
        feature_set: Features to export.
        seqrecords: Sequences keyed by sequence name.
        fasta_file_handle: Open file handle to write the FASTA to.
        feature_type: If given, only features of this type are written.

    Raises:
        FastaExportError: if a feature refers to a sequence that is not in ``seqrecords``.
    """
    records = []
    for feature in feature_set.features:
        if feature_type is not None and feature.type != feature_type:
            continue
        if feature.seqname not in seqrecords:
            raise FastaExportError(f"No sequence for {feature.seqname}")
        seq = extract_feature_sequence(feature, seqrecords[feature.seqname])
        name = f"{feature.seqname}:{feature.start}-{feature.end}({feature.strand.to_symbol()})"
        records.append(SeqRecord(seq, id=name, description=feature.type))
    SeqIO.write(records, fasta_file_handle, format="fasta")
