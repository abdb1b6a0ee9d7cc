"""Collaborator protocol exports."""

from .consent_store import ConsentStoreProtocol
from .metadata import MetadataProviderProtocol
from .pipeline import AttributeFilterProtocol, PipelineRunnerProtocol
from .session import SessionProtocol

__all__ = [
    "SessionProtocol",
    "MetadataProviderProtocol",
    "PipelineRunnerProtocol",
    "AttributeFilterProtocol",
    "ConsentStoreProtocol",
]
