"""Channel Gateway — HTTP endpoints for channel/newsletter operations of a messaging client.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
