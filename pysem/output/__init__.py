# pysem/output/__init__.py

"""
Output writing submodule for the projection engine.
"""
from .writer import OutputWriter
