"""pdf_prose -- guarded PDF text extraction for downstream LLM analysis."""

__version__ = "0.1.0"
