"""Error taxonomy for the command pipeline and game setup.

Command-level errors (ParseError, ValidationError, InsufficientResources,
ActionNotFound) are recoverable: the acting player is told what went wrong
and asked for another command. ConfigurationError is fatal at setup.
"""

from enum import Enum


class ColonyError(Exception):
    """Base class for all game errors."""


class ErrorType(Enum):
    """Classification of command parse errors."""

    EMPTY_COMMAND = "empty_command"
    UNKNOWN_ENTITY = "unknown_entity"
    UNKNOWN_ACTION = "unknown_action"
    SYNTAX_ERROR = "syntax_error"


class ParseError(ColonyError):
    """Raised when command text cannot be turned into a Command."""

    def __init__(self, error_type: ErrorType, message: str):
        """Initialize parse error.

        Args:
            error_type: Classification of the error
            message: Human-readable error message
        """
        self.error_type = error_type
        self.message = message
        super().__init__(message)


class ValidationError(ColonyError):
    """Raised when a parsed command is invalid for the current game state."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class InsufficientResources(ValidationError):
    """Raised when a planet cannot pay for a reservation.

    Attributes:
        planet_id: Planet whose ledger was short (None for bare ledgers)
        cost: Requested amount
        available: Amount available at the time of the request
    """

    def __init__(self, cost, available, planet_id: str | None = None):
        self.planet_id = planet_id
        self.cost = cost
        self.available = available
        short = [
            f"{kind.value} {amount}/{available.get(kind)}"
            for kind, amount in cost.items()
            if amount > available.get(kind)
        ]
        where = f" on {planet_id}" if planet_id else ""
        super().__init__(f"Insufficient resources{where}: need {', '.join(short)}")


class ActionNotFound(ColonyError):
    """Raised when cancelling a pending action that does not exist."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"No pending action: {reference}")


class ConfigurationError(ColonyError):
    """Raised when structure or ship configuration is missing or malformed."""
