"""Image data models"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_MIME_TYPE = "image/png"


class ImageInput(BaseModel):
    """One input image, supplied inline or by file path"""
    dataBase64: Optional[str] = Field(default=None, description="Base64 without data URL prefix")
    path: Optional[str] = Field(default=None, description="Path to the input image file")
    mimeType: Optional[str] = Field(default=None, description="image/png or image/jpeg")


@dataclass(frozen=True)
class GeneratedImage:
    """Image returned by the Gemini API"""
    data: str
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"
