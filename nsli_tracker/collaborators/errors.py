"""Errors raised by the external collaborators."""


class TrackerError(Exception):
    """Base class for collaborator failures surfaced to the user."""


class StorageError(TrackerError):
    """The storage collaborator rejected or failed a read or write."""


class AuthenticationError(TrackerError):
    """The identity collaborator rejected a sign-in, sign-up or sign-out."""

    PROVIDER_PREFIXES = ("Firebase: ",)

    @property
    def user_message(self) -> str:
        """The message with any provider prefix removed."""
        message = str(self)
        for prefix in self.PROVIDER_PREFIXES:
            message = message.replace(prefix, "")
        return message
