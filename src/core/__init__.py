"""
Core domain models, integer math primitives, contracts and errors.

This module contains the foundational building blocks of the ledger that are
independent of external collaborators (liquidity pools, harnesses, etc.).
"""
