"""Tools package for external inference capabilities."""

from oncotriage.tools.inference import (
    ModalityInferenceProvider,
    MockInferenceProvider,
    get_inference_provider,
)

__all__ = [
    "ModalityInferenceProvider",
    "MockInferenceProvider",
    "get_inference_provider",
]
