"""Test suite for the pdf_prose extraction pipeline."""
