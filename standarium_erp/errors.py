"""Exception types shared by the gateway, backends and callbacks."""


class StandariumError(Exception):
    """Base class for every error raised on purpose by this package."""


class ConfigError(StandariumError):
    pass


class AuthenticationError(StandariumError):
    """Sign-in / sign-up failure, carrying the user-facing message."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class AuthRequiredError(StandariumError):
    pass


class RemoteOperationError(StandariumError):
    def __init__(self, message, collection=None):
        super().__init__(message)
        self.message = message
        self.collection = collection


# ── Provider error codes → user messages ────────────────────────────────────
# Supabase codes first, then the legacy "auth/..." codes older accounts
# were created with.

MSG_WRONG_PASSWORD = "Senha incorreta. Tente novamente."
MSG_USER_NOT_FOUND = "Nenhuma conta encontrada com este e-mail."
MSG_INVALID_EMAIL = "Formato de e-mail inválido."
MSG_EMAIL_IN_USE = "Este e-mail já está em uso."
MSG_WEAK_PASSWORD = "A senha deve ter pelo menos 6 caracteres."
MSG_GENERIC = "Ocorreu um erro. Tente novamente."

AUTH_ERROR_MESSAGES = {
    "invalid_credentials": MSG_WRONG_PASSWORD,
    "wrong_password": MSG_WRONG_PASSWORD,
    "auth/wrong-password": MSG_WRONG_PASSWORD,
    "user_not_found": MSG_USER_NOT_FOUND,
    "auth/user-not-found": MSG_USER_NOT_FOUND,
    "email_address_invalid": MSG_INVALID_EMAIL,
    "validation_failed": MSG_INVALID_EMAIL,
    "auth/invalid-email": MSG_INVALID_EMAIL,
    "user_already_exists": MSG_EMAIL_IN_USE,
    "email_exists": MSG_EMAIL_IN_USE,
    "auth/email-already-in-use": MSG_EMAIL_IN_USE,
    "weak_password": MSG_WEAK_PASSWORD,
    "auth/weak-password": MSG_WEAK_PASSWORD,
}


def auth_error_message(code):
    """Map a provider error code to one of the fixed user-facing messages."""
    return AUTH_ERROR_MESSAGES.get(code or "", MSG_GENERIC)
