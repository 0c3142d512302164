"""Error taxonomy for studio sessions and the remote design client."""

from __future__ import annotations


class RoomStudioError(Exception):
    """Base class for every handled failure in the studio."""


class ValidationError(RoomStudioError):
    """Nothing to submit; raised before any network call is made."""


class TransportError(RoomStudioError):
    """The model provider could not be reached or answered with an HTTP error."""


class EmptyResultError(RoomStudioError):
    """The call succeeded but produced no usable images or labels."""


class AssetConversionError(RoomStudioError):
    """Image bytes could not be turned into an editable image reference."""


class BusyError(RoomStudioError):
    """A scan or generation is already running for this session."""
