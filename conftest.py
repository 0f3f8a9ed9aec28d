"""
pytest root marker.

Test modules import the package as ``src.ndcore``; keeping this file at the
repository root puts the root on ``sys.path`` during collection.
"""
