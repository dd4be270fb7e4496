"""Signature image domain model."""

from pydantic import BaseModel, ConfigDict, Field


class SignatureImage(BaseModel):
    """PNG encoded signature raster and its intrinsic pixel size."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., min_length=1, description="PNG encoded image bytes")
    width: int = Field(..., gt=0, description="Image width in pixels")
    height: int = Field(..., gt=0, description="Image height in pixels")

    @property
    def aspect(self) -> float:
        """Height over width."""
        return self.height / self.width
