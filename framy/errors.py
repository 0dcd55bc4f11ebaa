"""Exception types raised by the framing pipeline."""

from __future__ import annotations


class FramyError(Exception):
    """Base class; the message is a single human-readable line."""


class DecodeError(FramyError):
    """The input file is missing, not an image, truncated or has unreadable metadata."""


class InvalidConfiguration(FramyError):
    """The frame settings cannot produce a valid canvas."""


class EncodeError(FramyError):
    """The canvas could not be written in the requested format."""


class CompositionError(FramyError):
    """The output canvas could not be allocated."""
