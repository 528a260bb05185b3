"""Pydantic v2 models for the response handed to the request layer.

These schemas define the contract between the extraction pipeline and the
HTTP collaborator that serves it. Field names mirror the JSON the upload
client consumes, so ``extractedPages`` keeps its camelCase spelling via an
alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pdf_prose.extractor.errors import ExtractionError
from pdf_prose.extractor.types import ExtractionResult


class ExtractionInfo(BaseModel):
    """Document-level counts for the accepted extraction.

    Attributes:
        pages: Total page count reported by the winning strategy.
        characters: Length of the returned text.
        words: Whitespace-delimited word count of the returned text.
        method: Strategy identifier that produced the text.
        extracted_pages: Pages actually processed (<= pages, <= 50).
    """

    model_config = ConfigDict(populate_by_name=True)

    pages: int = Field(ge=0)
    characters: int = Field(ge=0)
    words: int = Field(ge=0)
    method: str
    extracted_pages: int = Field(ge=0, alias="extractedPages")


class ExtractionMetadata(BaseModel):
    """Provenance metadata stored alongside the extracted text."""

    extraction_method: str
    file_size: int = Field(ge=0)
    extraction_quality: str  # "low", "medium", "high"


class ExtractionResponse(BaseModel):
    """Successful extraction payload."""

    text: str
    info: ExtractionInfo
    metadata: ExtractionMetadata


class ErrorResponse(BaseModel):
    """Failure payload; never carries partial text."""

    error: str = "Failed to extract text from PDF"
    details: str


def build_response(result: ExtractionResult, file_size: int) -> dict:
    """Serialize an accepted result into the response JSON shape.

    Args:
        result: Accepted extraction result.
        file_size: Size of the source buffer in bytes.

    Returns:
        Dict with ``text``, ``info`` and ``metadata`` keys.
    """
    response = ExtractionResponse(
        text=result.text,
        info=ExtractionInfo(
            pages=result.page_count,
            characters=result.character_count,
            words=result.word_count,
            method=result.strategy_id.value,
            extracted_pages=result.extracted_page_count,
        ),
        metadata=ExtractionMetadata(
            extraction_method=result.strategy_id.value,
            file_size=file_size,
            extraction_quality=result.quality_tier.value,
        ),
    )
    return response.model_dump(by_alias=True)


def build_error_response(error: ExtractionError) -> dict:
    """Serialize a fatal pipeline error into the error JSON shape."""
    return ErrorResponse(details=str(error)).model_dump()
