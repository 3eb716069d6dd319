"""Models for image analysis results."""

from dataclasses import dataclass

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from visual_dictionary.domain.words import WordAnalysis


class AnalysisRecord(BaseModel):
    """Single word extracted from an image by the vision model."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    word: str = Field(min_length=1)
    definition: str
    sample_sentence: str = Field(
        default="",
        validation_alias=AliasChoices("sampleSentence", "sample_sentence", "example"),
        serialization_alias="sampleSentence",
    )

    def to_wire(self) -> dict[str, str]:
        """Return the camelCase payload used by the analysis endpoints."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of analyzing one image."""

    image_url: str
    records: list[AnalysisRecord]
    saved: list[WordAnalysis]
    failed_inserts: int
    fallback: bool
