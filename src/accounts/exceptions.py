class OwnerAccountProtectedError(Exception):
    """Owner accounts cannot be deleted through the API."""
