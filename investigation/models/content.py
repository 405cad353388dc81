"""
Content models: immutable narrative records served by a content provider.

Built from JSON/Firestore dicts via Model.model_validate(d). Field aliases
accept the camelCase keys used by the content authoring tool.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _ContentModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Podcast(_ContentModel):
    id: str
    title: str
    description: str = ""
    intro_audio_url: str = Field(alias="introAudioUrl")
    accusation_intro_audio_url: Optional[str] = Field(default=None, alias="accusationIntroAudioUrl")
    result_correct_audio_url: Optional[str] = Field(default=None, alias="resultCorrectAudioUrl")
    result_wrong_audio_url: Optional[str] = Field(default=None, alias="resultWrongAudioUrl")

    def result_audio_url(self, is_correct: bool) -> Optional[str]:
        """Podcast-level result clip for the outcome, if one is configured."""
        return self.result_correct_audio_url if is_correct else self.result_wrong_audio_url


class MajorBranch(_ContentModel):
    id: str
    podcast_id: str = Field(alias="podcastId")
    title: str
    intro_audio_url: str = Field(alias="introAudioUrl")


class MinorBranch(_ContentModel):
    id: str
    major_branch_id: str = Field(alias="mainBranchId")
    title: str
    audio_url: str = Field(alias="audioUrl")


class Accusation(_ContentModel):
    id: str
    podcast_id: str = Field(alias="podcastId")
    suspect_name: str = Field(alias="suspectName")
    audio_url: str = Field(alias="audioUrl")
    is_correct: bool = Field(alias="isCorrect")
