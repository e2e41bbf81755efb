"""
The CONTROLLER layer turns model data into something to look at:
it generates batches and filters/projects them for display.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
