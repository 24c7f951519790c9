"""Exceptions for the doubles round-robin scheduler."""


# ========== Base Exception ==========


class DrrsError(Exception):
    """Base exception for all scheduler errors.

    Catching this handles every error the package raises on purpose.
    """

    pass


# ========== Setup Exceptions ==========


class TournamentSetupError(DrrsError, ValueError):
    """Raised when roster or court inputs are outside what the engine accepts."""

    pass


class RosterSizeError(TournamentSetupError):
    """Base exception for roster size violations."""

    pass


class RosterTooSmallError(RosterSizeError):
    """Raised when fewer than the minimum number of players are given."""

    pass


class RosterTooLargeError(RosterSizeError):
    """Raised when more than the maximum number of players are given."""

    pass


class InvalidPlayerIdError(TournamentSetupError):
    """Raised when player ids repeat or contain an id separator."""

    pass


class CourtCountError(TournamentSetupError):
    """Base exception for court count violations."""

    pass


class NoCourtsError(CourtCountError):
    """Raised when no courts are available."""

    pass


class TooManyCourtsError(CourtCountError):
    """Raised when more than the maximum number of courts are given."""

    pass


class CourtNumberingError(TournamentSetupError):
    """Raised when court numbers are not exactly 1 through the court count."""

    pass


# ========== Input Exceptions ==========


class ConfigError(DrrsError):
    """Raised when a config file or schedule CSV cannot be interpreted."""

    pass
