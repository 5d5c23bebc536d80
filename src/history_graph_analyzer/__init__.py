"""History Graph Analyzer - discover historical figures and their relationships."""

__version__ = "0.1.0"
