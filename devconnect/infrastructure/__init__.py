"""Infrastructure Layer - database, repositories, password hashing and logging.

Invariants:
    - All driver exceptions mapped to core/errors.py types before leaving this layer
"""
