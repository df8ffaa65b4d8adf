"""
Test suite for the reflective fee token ledger

Contains:
- tests/conftest.py : Fixtures and the in-memory liquidity pool
- tests/unit/       : Unit tests for individual modules and ledger scenarios
"""
