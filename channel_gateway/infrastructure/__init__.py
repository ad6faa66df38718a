"""Infrastructure Layer — messaging bridge client, session registry, logging.

Invariants:
    - All external calls wrapped with timeout and error mapping
"""
