"""
Reading and writing of features in the tab-separated General Feature Format (GFF). Attributes (column 9) are kept
as opaque strings; they are only pattern-matched when a :class:`~gffset.gene.feature_set.FeatureSet` is grouped
by tag.
"""
