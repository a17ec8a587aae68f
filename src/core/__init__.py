"""
Core domain models, pricing primitives, and row contracts.

This module contains the foundational building blocks that are independent
of external systems (hosted table store, identity service).
"""
