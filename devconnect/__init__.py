"""DevConnect Application Package - developer social network API.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
