from pydantic import BaseModel, ConfigDict, Field, StrictStr, computed_field
from typing import Optional, List, Any

class ImageUrl(BaseModel):
    model_config = ConfigDict(extra="allow")

    url: str

class ImageData(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    image_url: ImageUrl

class UpstreamMessage(BaseModel):
    """choices[0].message from the chat completion, including OpenRouter's images extension"""
    model_config = ConfigDict(extra="allow")

    role: Optional[str] = None
    content: Optional[str] = None
    images: List[ImageData] = Field(default_factory=list)

class GenerateRequest(BaseModel):
    # Only the camelCase key is read from the body
    image_url: Optional[StrictStr] = Field(default=None, validation_alias="imageUrl")
    prompt: Optional[StrictStr] = None

class GenerateResponse(BaseModel):
    success: bool = True
    result: Optional[str] = None
    images: List[ImageData] = Field(default_factory=list)

    @computed_field(alias="hasImages")
    @property
    def has_images(self) -> bool:
        return len(self.images) > 0

    @classmethod
    def from_message(cls, message: UpstreamMessage) -> "GenerateResponse":
        return cls(
            success=True,
            result=message.content,
            images=message.images
        )

class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None

class GenerateHealthResponse(BaseModel):
    configured: bool
    model: str
    message: str
