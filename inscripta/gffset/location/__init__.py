"""
Strands and coordinate range operations. Coordinates in GFFSet are always 1-based and inclusive, exactly as they
appear in a GFF file.
"""

from inscripta.gffset.location.strand import Strand  # noqa F401
