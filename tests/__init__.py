"""
Test suite for physcalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""
