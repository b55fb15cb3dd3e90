"""
GFFSet manages collections of GFF features and the structural transforms used to clean, group and derive
gene structure from them.

The central object is the :class:`~gffset.gene.feature_set.FeatureSet`, an ordered list of
:class:`~gffset.gene.feature.Feature` objects that can optionally be partitioned into named
:class:`~gffset.gene.group.FeatureGroup` objects (for example, all of the records of one transcript).
"""
__version__ = "0.1.0"
