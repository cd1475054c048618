"""
Test suite for radixcalc

Contains:
- tests/unit/          : Unit tests for individual modules
"""
