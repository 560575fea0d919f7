class LookupFailure(Exception):
    """A backend lookup could not be completed (network, malformed query, store-level denial)."""

    def __init__(self, message: str, step: str = ""):
        self.message = message
        self.step = step
        super().__init__(f"{step}: {message}" if step else message)


class PermissionLookupError(LookupFailure):
    """Raised when a step of permission resolution fails against the store."""
    pass


class IdentityLookupError(LookupFailure):
    """Raised when the identity provider cannot be reached."""
    pass
