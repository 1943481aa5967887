from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    rating: int = Field(..., ge=1, le=5, description="Rating must be between 1 and 5")
    comment: str = Field(..., min_length=1, description="Comment text")


class ReviewPayload(BaseModel):
    # Forms post review[rating] / review[comment]
    review: ReviewCreate
