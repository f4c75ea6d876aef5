"""
Configs module exceptions.
"""

from shared.exceptions import NotFoundError


class ConfigNotFoundError(NotFoundError):
    """Raised when no config record exists for the requested scope."""

    def __init__(self, scope: str):
        super().__init__(
            f"No configuration found for {scope}",
            code="CONFIG_NOT_FOUND",
            details={"scope": scope},
        )
