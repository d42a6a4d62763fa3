"""Tests for the external classifier adapters."""

from unittest.mock import patch

from expense_ml.inference.classification import (
    HuggingFaceExternalClassifier,
    NullExternalClassifier,
    load_external_classifier,
)

from tests.fakes import FakePipeline


class TestHuggingFaceExternalClassifier:
    def test_returns_label_above_threshold(self) -> None:
        classifier = HuggingFaceExternalClassifier(FakePipeline("Food", 0.9))

        assert classifier.classify("coffee") == "Food"

    def test_accepts_single_dict_result(self) -> None:
        classifier = HuggingFaceExternalClassifier(FakePipeline("Food", 0.9, as_list=False))

        assert classifier.classify("coffee") == "Food"

    def test_below_threshold_returns_none(self) -> None:
        classifier = HuggingFaceExternalClassifier(FakePipeline("Food", 0.59))

        assert classifier.classify("coffee") is None

    def test_custom_threshold(self) -> None:
        classifier = HuggingFaceExternalClassifier(
            FakePipeline("Food", 0.4), confidence_threshold=0.3
        )

        assert classifier.classify("coffee") == "Food"

    def test_label_map(self) -> None:
        classifier = HuggingFaceExternalClassifier(
            FakePipeline("LABEL_3", 0.8), label_map={"LABEL_3": "Transport"}
        )

        assert classifier.classify("bus ticket") == "Transport"

    def test_blank_text_skips_model(self) -> None:
        def pipe(text):
            raise AssertionError("model must not be called")

        classifier = HuggingFaceExternalClassifier(pipe)

        assert classifier.classify("   ") is None
        assert classifier.classify("") is None

    def test_without_pipeline(self) -> None:
        classifier = HuggingFaceExternalClassifier(None)

        assert classifier.enabled is False
        assert classifier.classify("coffee") is None


class TestLoadExternalClassifier:
    def test_no_model_configured(self) -> None:
        classifier = load_external_classifier(None)

        assert isinstance(classifier, NullExternalClassifier)
        assert classifier.classify("coffee") is None

    def test_load_failure_falls_back_to_null(self) -> None:
        with patch.object(
            HuggingFaceExternalClassifier, "load", side_effect=OSError("model not found")
        ):
            classifier = load_external_classifier("missing/model")

        assert isinstance(classifier, NullExternalClassifier)

    def test_loads_configured_model(self) -> None:
        loaded = HuggingFaceExternalClassifier(FakePipeline("Food", 0.9))
        with patch.object(HuggingFaceExternalClassifier, "load", return_value=loaded) as load:
            classifier = load_external_classifier(
                "some/model", device="cpu", confidence_threshold=0.7, label_map={"a": "b"}
            )

        assert classifier is loaded
        load.assert_called_once_with(
            "some/model", device="cpu", confidence_threshold=0.7, label_map={"a": "b"}
        )
