"""
Data models for zero-shot classification.

ClassifyRequest is the inbound payload, LabelScore is what the model
returns for one label against one chunk, and Classification is the merged
result for a label across the whole request.
"""

from pydantic import BaseModel, ConfigDict, Field


class ClassifyRequest(BaseModel):
    """
    A classification request: free text plus candidate labels.

    Both fields may be empty. Categories are kept exactly as supplied
    (order, case, whitespace and duplicates included).
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Free text to classify, any length")
    categories: list[str] = Field(
        ...,
        description="Candidate labels; duplicates are allowed",
        examples=[["Education", "Health Care", "Defense"]],
    )


class LabelScore(BaseModel):
    """Relevance of one label to one chunk."""

    model_config = ConfigDict(frozen=True)

    label: str
    score: float = Field(..., ge=0.0, le=1.0)


class Classification(BaseModel):
    """Winning score for one label across every chunk of a request."""

    label: str = Field(..., description="Label exactly as supplied by the caller")
    score: float = Field(..., description="Maximum score seen for the label")
