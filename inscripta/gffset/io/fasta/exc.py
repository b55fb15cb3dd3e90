from inscripta.gffset.io.exc import GFFSetIOException


class FastaExportError(GFFSetIOException):
    """
    Raised when sequence for a feature cannot be exported, usually because there is no sequence for its seqname.
    """

    pass
