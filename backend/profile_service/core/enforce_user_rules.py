"""User Rule Enforcement — pre-condition checks for user operations.

Invariants:
    - All functions are PURE: they judge facts the shell already fetched
    - Return the taxonomy error on violation, None on success
    - Checks never raise

Design Decisions:
    - Return errors (not exceptions): operations wrap them in Err(...) so the
      failure path stays a value all the way to the HTTP boundary
"""

from profile_service.core.errors import ConflictError, NoUpdatesError, NotFoundError


def check_has_updates(changes: dict) -> NoUpdatesError | None:
    """An update must supply at least one mutable field."""
    if not changes:
        return NoUpdatesError()
    return None


def check_user_found(user: object | None) -> NotFoundError | None:
    """A lookup by id must yield a row."""
    if user is None:
        return NotFoundError("User not found")
    return None


def check_email_available(email_taken: bool) -> ConflictError | None:
    """No other user may already own the email."""
    if email_taken:
        return ConflictError("Email already exists")
    return None
