"""Budget and preference models for an outing request."""

from pydantic import BaseModel, Field, field_validator

from app.schemas.enums import WalkingTolerance


class Budget(BaseModel):
    """Total spend for the outing."""

    amount: float = Field(..., gt=0, description="Total budget amount for the whole party")
    currency: str = Field(default="EUR", min_length=3, max_length=3, description="ISO 4217 currency code")

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, value: str) -> str:
        if not value.isalpha():
            raise ValueError("currency must be a 3-letter code.")
        return value.upper()


class Preferences(BaseModel):
    """What the party enjoys and must avoid.

    Fields:
        `vibe`: mood tags such as romantic or playful
        `likes`: free-form interests matched against venue names
        `dietary`: dietary restrictions
        `alcohol_ok`: whether alcohol-serving stops are acceptable
        `family_friendly`: family outing (changes stop ordering and titles)
        `walking`: walking tolerance
        `indoors_preferred`: preference for indoor venues
    """

    vibe: list[str] = Field(default_factory=list, description="Mood tags")
    likes: list[str] = Field(default_factory=list, description="Interest keywords")
    dietary: list[str] = Field(default_factory=list, description="Dietary restrictions")
    alcohol_ok: bool = Field(default=True, description="Alcohol is acceptable")
    family_friendly: bool = Field(default=False, description="Family outing")
    walking: WalkingTolerance = Field(default=WalkingTolerance.MEDIUM, description="Walking tolerance")
    indoors_preferred: bool = Field(default=False, description="Prefers indoor venues")
