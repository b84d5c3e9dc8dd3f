"""User Profile Service — CRUD API for user profile records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
