"""Pipeline modules.

- orchestrator: Batch / single-scan driver
- converter: xtract2fil invocation and environment bootstrap
- postprocess: Segment deletion and header relocation
"""

from rawbatch.pipeline.orchestrator import BatchOrchestrator
from rawbatch.pipeline.converter import ConverterInvoker, ConversionResult
from rawbatch.pipeline.postprocess import PostProcessor

__all__ = [
    "BatchOrchestrator",
    "ConverterInvoker",
    "ConversionResult",
    "PostProcessor",
]
