"""Exceptions raised while resolving Rundeck credentials and settings.

Example:
    ```python
    from rundeck_client_core.auth.exceptions import CredentialNotFoundError

    try:
        credential = resolve_credentials()
    except CredentialNotFoundError as e:
        print(f"Missing {e.field}; set {e.env_var_name}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential resolution errors.

    Catching this catches every fatal resolution failure.
    """

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential field is still blank after the whole chain.

    Attributes:
        env_var_name: Environment variable(s) that would have supplied the field.
        field: The credential field that is missing (``"username"``, ``"password"``).
    """

    def __init__(self, message: str, env_var_name: str | None = None, field: str | None = None):
        """Initialize CredentialNotFoundError.

        Args:
            message: Error message describing what credential is missing.
            env_var_name: Optional environment variable name for reference.
            field: Optional name of the missing credential field.
        """
        super().__init__(message)
        self.env_var_name = env_var_name
        self.field = field


class ConfigurationError(CredentialError):
    """Raised when a required setting is missing or malformed.

    Attributes:
        env_var_name: The environment variable that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name
