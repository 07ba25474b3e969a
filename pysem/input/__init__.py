# pysem/input/__init__.py

"""
Input data handling submodule for the projection engine.
"""
from .reader import ProjectInputReader
