"""
Exceptions raised by the hand wave detector.
"""


class HandWaveError(Exception):
    """
    Base class for all hand wave detector errors.
    """


class MissingCollaborator(HandWaveError):
    """
    Raised when a required collaborator (normally the frame source) is not
    available at startup. Detection never starts, but the host keeps running.
    """


class InvalidFrame(HandWaveError, ValueError):
    """
    Raised when a delivered frame is missing or cannot be read as pixels.
    The frame is skipped and processing continues with the next one.
    """


class EmptyFrame(InvalidFrame):
    """
    Raised when a delivered frame has no pixels.
    """
