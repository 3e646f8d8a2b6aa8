"""
Core units algebra, function calculus, and numerical primitives.

This package is independent of any display layer: descriptors are plain
LaTeX strings, values are floats or Vectors.
"""
