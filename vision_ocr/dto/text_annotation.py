from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vision_ocr.dto.geometry import BoundingPoly


class TextAnnotation(BaseModel):
    """One recognized text span from ``responses[0].textAnnotations``.

    The service puts a whole-image annotation first, followed by one entry
    per detected word; only that first entry usually carries a locale.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    locale: str | None = Field(default=None, strict=True, description="Detected locale, absent on per-word entries.")
    description: str = Field(..., strict=True, description="Recognized text.")
    bounding_poly: BoundingPoly = Field(..., alias="boundingPoly", description="Polygon around the text.")

    def to_payload(self) -> dict[str, Any]:
        """Return the wire shape of this annotation; an absent locale is left out."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
