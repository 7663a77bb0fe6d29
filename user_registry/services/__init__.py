"""Service Layer — orchestrates core rules around repository IO.

Invariants:
    - Services never commit; routes own the transaction boundary
"""
