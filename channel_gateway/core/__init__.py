"""Core Layer — domain types, errors and collaborator protocols. No IO.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
"""
