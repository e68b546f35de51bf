"""Directory tree walker with entry classification and filtering.

This package provides the walk engine shared by every consumer in dirwalk, the
immutable entry records it produces and the configuration that controls it.
"""
