from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class ColorScheme(str, Enum):
    VIBRANT = "vibrant"
    PROFESSIONAL = "professional"
    ACADEMIC = "academic"
    CREATIVE = "creative"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Request fields are optional so missing values reach the generators and come
# back as 400 validation errors with field-specific messages.
class DescriptionRequest(_CamelModel):
    event_title: Optional[str] = Field(default=None, alias="eventTitle")
    event_type: Optional[str] = Field(default=None, alias="eventType")
    key_points: Optional[List[str]] = Field(default=None, alias="keyPoints")
    target_audience: Optional[str] = Field(default=None, alias="targetAudience")
    duration: Optional[str] = None
    location: Optional[str] = None


class DescriptionResponse(_CamelModel):
    description: str
    generated_at: datetime = Field(alias="generatedAt")


class BannerRequest(_CamelModel):
    event_title: Optional[str] = Field(default=None, alias="eventTitle")
    event_type: Optional[str] = Field(default=None, alias="eventType")
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    color_scheme: Optional[str] = Field(default=None, alias="colorScheme")


class BannerResult(_CamelModel):
    prompt: str
    image_url: str = Field(alias="imageUrl")
    generated_at: datetime = Field(alias="generatedAt")


class BannerResponse(_CamelModel):
    success: bool = True
    banner: BannerResult
