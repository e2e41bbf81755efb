"""
Synthetic N-dimensional point generation, grid indexing and 2D projection.
"""
