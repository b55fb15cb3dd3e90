"""
Features, feature groups and the transforms that operate on them.
"""
