class GFFSetException(Exception):
    """
    Base exception class for GFFSet.
    """

    pass


class GroupingRequiredError(GFFSetException):
    """
    Raised when an operation that works group-by-group is performed on a FeatureSet that has not been grouped.
    """

    pass


class GroupMembershipError(GFFSetException):
    """
    Raised when a Feature cannot be found in any group of a grouped FeatureSet. This means the grouping no longer
    reflects the feature list, and the grouping should be rebuilt.
    """

    pass


class InvalidFrameError(GFFSetException):
    """
    Raised when a frame or phase value is outside of the range [0, 2].
    """

    pass


class InvalidRangeError(GFFSetException):
    """
    Raised when a coordinate range query is given an end position before its start position.
    """

    pass
