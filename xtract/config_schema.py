from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

NonNegativeInt = Annotated[int, Field(ge=0)]


class QuotesConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = True
    max_depth: NonNegativeInt = 32  # 0 keeps only the top-level post


class UrlsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    expand: bool = True
    strip_media_links: bool = True


class MediaConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    excluded_video_content_types: list[str] = Field(
        default_factory=lambda: ["application/x-mpegURL"]
    )

    @field_validator("excluded_video_content_types")
    @classmethod
    def _strip_content_types(cls, v: list[str]) -> list[str]:
        out: list[str] = []
        for item in v:
            s = (item or "").strip()
            if s and s not in out:
                out.append(s)
        return out


class TransformConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    quotes: QuotesConfig = Field(default_factory=QuotesConfig)
    urls: UrlsConfig = Field(default_factory=UrlsConfig)
    media: MediaConfig = Field(default_factory=MediaConfig)
