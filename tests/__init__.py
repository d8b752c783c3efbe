"""
Test suite for boundint

Contains:
- tests/unit/          : Unit tests for individual modules
"""
