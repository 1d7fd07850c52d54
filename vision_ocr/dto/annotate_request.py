from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vision_ocr.processor.image_encoder import EncodedImage

DOCUMENT_TEXT_DETECTION = "DOCUMENT_TEXT_DETECTION"


class ImageContent(BaseModel):
    content: str = Field(..., description="Base64-encoded PNG bytes.")


class Feature(BaseModel):
    type: str = Field(DOCUMENT_TEXT_DETECTION, description="Requested detection feature.")


class ImageContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    language_hints: list[str] = Field(..., alias="languageHints", description="BCP-47 language codes.")


class AnnotateImageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image: ImageContent
    features: list[Feature] = Field(default_factory=lambda: [Feature()])
    image_context: ImageContext | None = Field(default=None, alias="imageContext")


class BatchAnnotateImagesRequest(BaseModel):
    """JSON body posted to ``images:annotate``."""

    requests: list[AnnotateImageRequest]


def build_annotate_request(image: EncodedImage, language_hints: list[str] | None = None) -> dict[str, Any]:
    """Build the outbound payload for one image.

    Args:
        image: PNG-encoded image to annotate.
        language_hints: Optional language codes; omitted from the payload when empty.

    Returns:
        dict[str, Any]: ``{"requests": [{"image": ..., "features": [...]}]}``.
    """
    image_context = ImageContext(language_hints=list(language_hints)) if language_hints else None
    request = BatchAnnotateImagesRequest(
        requests=[AnnotateImageRequest(image=ImageContent(content=image.content), image_context=image_context)]
    )
    return request.model_dump(by_alias=True, exclude_none=True)
