"""Pydantic models for request payloads."""

from pydantic import AliasChoices, BaseModel, Field


class AnalyzeImageRequest(BaseModel):
    """Body of the analyze-image function."""

    image: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image", "imageUrl", "image_url"),
    )


class GenerateAudioRequest(BaseModel):
    """Body of the generate-audio function."""

    text: str | None = None


class Credentials(BaseModel):
    """Email and password sign-in payload."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
