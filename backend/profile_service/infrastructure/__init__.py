"""Infrastructure Layer — database session management, repositories and logging.

Invariants:
    - Infrastructure never decides business rules; it only stores, loads and logs
"""
