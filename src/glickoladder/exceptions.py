# src/glickoladder/exceptions.py

"""Custom exception hierarchy for GlickoLadder.

The rating core itself never raises for bad numbers; these exceptions are
raised at the edges (ladder service, request validation, solver guard) and
mapped to HTTP status codes in ``main.py``.
"""

from __future__ import annotations


class GlickoLadderError(Exception):
    """Base exception for all GlickoLadder errors.

    Attributes:
        message: Human-readable error description
        details: Optional dict with additional context for logging/debugging
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Resource Not Found Errors (HTTP 404)
# =============================================================================


class ResourceNotFoundError(GlickoLadderError):
    """Base class for resource not found errors."""

    pass


class PlayerNotFoundError(ResourceNotFoundError):
    """Raised when a player ID is not among the supplied ladder players."""

    def __init__(self, player_id: str) -> None:
        super().__init__(
            message=f"Player with ID {player_id} not found",
            details={"player_id": player_id},
        )


# =============================================================================
# Validation Errors (HTTP 422)
# =============================================================================


class ValidationError(GlickoLadderError):
    """Base class for validation errors."""

    pass


class SelfMatchError(ValidationError):
    """Raised when a match names the same player on both sides."""

    def __init__(self, player_id: str) -> None:
        super().__init__(
            message=f"Player {player_id} cannot play themself",
            details={"player_id": player_id},
        )


class InvalidScoreError(ValidationError):
    """Raised when a match score is not a loss, draw or win."""

    def __init__(self, score: float) -> None:
        super().__init__(
            message=f"Score must be 0, 0.5 or 1, got {score}",
            details={"score": score},
        )


class InvalidRatingDeviationError(ValidationError):
    """Raised when a rating deviation is not strictly positive."""

    def __init__(self, rd: float) -> None:
        super().__init__(
            message=f"Rating deviation must be positive, got {rd}",
            details={"rd": rd},
        )


# =============================================================================
# Rating Engine Errors (HTTP 500)
# =============================================================================


class RatingEngineError(GlickoLadderError):
    """Base class for rating calculation errors."""

    pass


class VolatilityConvergenceError(RatingEngineError):
    """Raised when the volatility solver exceeds its iteration budget."""

    def __init__(self, iterations: int, details: dict | None = None) -> None:
        context = {"iterations": iterations}
        context.update(details or {})
        super().__init__(
            message=f"Volatility solver did not converge after {iterations} iterations",
            details=context,
        )
