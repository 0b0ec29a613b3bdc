"""Services Layer - read-validate-write orchestration around the pure core.

Invariants:
    - Services depend on repository Protocols, never on a concrete session
    - Every rule decision is delegated to core/; services only load, apply and save
"""
