# smartcart/core/errors.py


class RemoteStoreError(Exception):
    """Raised when the Supabase realtime feed cannot be reached or used."""


class AuthProviderError(Exception):
    """
    Raised by an AuthProvider when Supabase Auth rejects or fails a call.

    Carries the provider message so services can show it in a notification.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
