from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ListingCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    location: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class ListingUpdate(BaseModel):
    """Partial update: only the fields present in the body are checked and written"""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    location: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
