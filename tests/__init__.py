"""
Test suite for ndgrid

Contains:
- tests/unit/          : Unit tests for individual modules
"""
