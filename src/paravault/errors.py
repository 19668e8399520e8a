"""Exception hierarchy for paravault."""

from __future__ import annotations


class ParavaultError(Exception):
    """Base class for all paravault errors."""


class ConfigError(ParavaultError):
    """Invalid or missing configuration."""


class ModelError(ParavaultError):
    """A language-model backend call failed (network, auth, quota, bad reply)."""


class ClassificationError(ParavaultError):
    """A screenshot could not be turned into a classification record."""


class EnvelopeError(ParavaultError, ValueError):
    """Model text could not be unwrapped into a JSON object."""


class MissingPayloadError(EnvelopeError):
    """The reply contains no JSON object at all."""


class MalformedPayloadError(EnvelopeError):
    """A JSON payload is present but cannot be parsed into an object."""


class EnrichmentStepError(ParavaultError):
    """One step of the research chain failed."""


class QueryGenerationError(EnrichmentStepError):
    pass


class SearchError(EnrichmentStepError):
    pass


class FilteringError(EnrichmentStepError):
    pass
