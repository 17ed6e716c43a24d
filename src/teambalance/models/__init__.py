"""Canonical data models shared by ingest, allocator and stats layers."""

from .participant import Participant

__all__ = ["Participant"]
