"""Include-graph cost analysis for flat C/C++ source directories."""

__version__ = "0.1.0"
