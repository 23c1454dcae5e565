"""Pipeline orchestration from credentials to recognized text."""

from clipocr.pipeline.processor import OcrPipeline, get_text_lines

__all__ = ["OcrPipeline", "get_text_lines"]
