class MemberStatusConflictError(Exception):
    """The member row changed since the admin last loaded it."""
