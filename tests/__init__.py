"""
Test suite for the bakery ledger

Contains:
- tests/unit/          : Unit tests for pricing, domain models, store adapters,
                         ledger operations, reporting and the session gate
"""
