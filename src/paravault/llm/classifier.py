"""Screenshot classification through a vision-capable language model."""

from __future__ import annotations

import logging
import mimetypes
from abc import ABC, abstractmethod

from pydantic import ValidationError

from paravault.config import AppConfig
from paravault.errors import ClassificationError, ConfigError, EnvelopeError, ModelError
from paravault.llm.backends import ClaudeModel, GeminiModel, ImageInput, LanguageModel
from paravault.llm.envelope import unwrap_json
from paravault.llm.prompts import CLASSIFICATION_PROMPT
from paravault.models import CapturedItem, ClassificationRecord

LOGGER = logging.getLogger(__name__)


class Classifier(ABC):
    """Turns a captured screenshot into a :class:`ClassificationRecord`."""

    provider: str = "unknown"

    @abstractmethod
    def classify(self, item: CapturedItem) -> ClassificationRecord:
        raise NotImplementedError

    def close(self) -> None:
        """Release backend resources."""


def load_image(item: CapturedItem) -> ImageInput:
    mime_type, _ = mimetypes.guess_type(item.identifier)
    return ImageInput(data=item.path.read_bytes(), mime_type=mime_type or "image/png")


def parse_classification(text: str) -> ClassificationRecord:
    """Parse a model reply into a record, raising ClassificationError when malformed."""
    try:
        payload = unwrap_json(text)
        return ClassificationRecord.model_validate(payload)
    except EnvelopeError as exc:
        raise ClassificationError(f"Unparsable classification reply: {exc}") from exc
    except ValidationError as exc:
        raise ClassificationError(
            f"Classification reply has the wrong shape ({exc.error_count()} errors): {exc}"
        ) from exc


class VisionClassifier(Classifier):
    """One model call per screenshot: fixed instruction plus the raw image."""

    def __init__(self, model: LanguageModel, prompt: str = CLASSIFICATION_PROMPT) -> None:
        self.model = model
        self.prompt = prompt

    def close(self) -> None:
        self.model.close()

    def classify(self, item: CapturedItem) -> ClassificationRecord:
        LOGGER.info("Analyzing %s with %s", item.identifier, self.provider)
        try:
            image = load_image(item)
        except OSError as exc:
            raise ClassificationError(f"Cannot read {item.path}: {exc}") from exc
        try:
            reply = self.model.generate(self.prompt, image=image)
        except ModelError as exc:
            raise ClassificationError(str(exc)) from exc
        record = parse_classification(reply)
        LOGGER.debug(
            "Classified %s as %s (%.2f)", item.identifier, record.category, record.confidence
        )
        return record


class GeminiClassifier(VisionClassifier):
    provider = "gemini"

    def __init__(self, model: GeminiModel) -> None:
        super().__init__(model)


class ClaudeClassifier(VisionClassifier):
    provider = "claude"

    def __init__(self, model: ClaudeModel) -> None:
        super().__init__(model)


def build_model(config: AppConfig) -> LanguageModel:
    """Create the language model client selected by ``config.provider``."""
    if config.provider == "gemini":
        if not config.google_api_key:
            raise ConfigError("GOOGLE_API_KEY is required for the gemini provider")
        kwargs = {"model": config.model_name} if config.model_name else {}
        return GeminiModel(config.google_api_key, timeout=config.request_timeout, **kwargs)
    if config.provider == "claude":
        if not config.anthropic_api_key:
            raise ConfigError("ANTHROPIC_API_KEY is required for the claude provider")
        kwargs = {"model": config.model_name} if config.model_name else {}
        return ClaudeModel(config.anthropic_api_key, timeout=config.request_timeout, **kwargs)
    raise ConfigError(f"Unknown AI provider: {config.provider}")


def build_classifier(model: LanguageModel) -> Classifier:
    """Wrap a model client in the classifier for its backend."""
    if isinstance(model, GeminiModel):
        return GeminiClassifier(model)
    if isinstance(model, ClaudeModel):
        return ClaudeClassifier(model)
    raise ConfigError(f"No classifier for model backend {type(model).__name__}")
