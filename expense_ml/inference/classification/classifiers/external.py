"""External (pretrained neural) classifier adapters.

The ensemble only relies on ``classify(text) -> category | None``; a None
result means "not confident enough" and is treated exactly like an
unavailable model.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class ExternalClassifier(Protocol):
    """Opaque single-label predictor without a confidence contract."""

    def classify(self, text: str) -> str | None: ...


class NullExternalClassifier:
    """Stand-in used when no external model is configured."""

    enabled = False

    def classify(self, text: str) -> str | None:
        return None


class HuggingFaceExternalClassifier:
    """Wrapper around a HuggingFace text-classification pipeline."""

    def __init__(
        self,
        pipe: Any,
        confidence_threshold: float = 0.60,
        label_map: dict[str, str] | None = None,
    ):
        self._pipe = pipe
        self.confidence_threshold = confidence_threshold
        self.label_map = label_map or {}

    @classmethod
    def load(
        cls,
        model_name: str,
        device: str = "cpu",
        confidence_threshold: float = 0.60,
        label_map: dict[str, str] | None = None,
    ) -> HuggingFaceExternalClassifier:
        """Load a text-classification model by name or local path."""
        from transformers import pipeline

        pipe = pipeline("text-classification", model=model_name, device=device)
        return cls(pipe, confidence_threshold=confidence_threshold, label_map=label_map)

    @property
    def enabled(self) -> bool:
        return self._pipe is not None

    def classify(self, text: str) -> str | None:
        if self._pipe is None or not text or not text.strip():
            return None

        results = self._pipe(text)
        # A single input may come back as a list with one dict
        if isinstance(results, list):
            if not results:
                return None
            results = results[0]

        label = results["label"]
        score = float(results["score"])
        if score < self.confidence_threshold:
            logger.debug(
                "External model below threshold for %r: %s (%.3f < %.2f)",
                text, label, score, self.confidence_threshold,
            )
            return None

        return self.label_map.get(label, label)


def load_external_classifier(
    model_name: str | None,
    device: str = "cpu",
    confidence_threshold: float = 0.60,
    label_map: dict[str, str] | None = None,
) -> ExternalClassifier:
    """Load the configured external model, or a null classifier.

    A model that fails to load is logged and replaced by the null classifier
    so that the ensemble keeps working on the local model alone.
    """
    if not model_name:
        logger.info("No external model configured")
        return NullExternalClassifier()

    try:
        classifier = HuggingFaceExternalClassifier.load(
            model_name,
            device=device,
            confidence_threshold=confidence_threshold,
            label_map=label_map,
        )
    except Exception:
        logger.exception("Failed to load external model %r", model_name)
        return NullExternalClassifier()

    logger.info("External model loaded: %s", model_name)
    return classifier
