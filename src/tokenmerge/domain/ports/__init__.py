"""Domain port definitions for adapters."""

from __future__ import annotations

from .hosting import AssetFetcher, ErrorReporter, SubmissionSource
from .probing import ProbeFailedError, ProbeResponse, UrlProbe, UrlProbeFactory
from .workspace import RegistryWorkspace, WorkspaceError

__all__ = [
    "AssetFetcher",
    "ErrorReporter",
    "ProbeFailedError",
    "ProbeResponse",
    "RegistryWorkspace",
    "SubmissionSource",
    "UrlProbe",
    "UrlProbeFactory",
    "WorkspaceError",
]
