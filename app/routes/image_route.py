from fastapi import APIRouter, HTTPException, Depends
from app.models.travel import ImageRequest, ImageResponse
from app.services.ai_service import AIConfigurationError, AIServiceError
from app.services.image_service import get_image_generator
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/generate-image", response_model=ImageResponse)
def generate_image(request: ImageRequest, generator = Depends(get_image_generator)):
    try:
        image_url = generator.generate(request.location)
        logger.info(f"Image generated for '{request.location}'")
        return ImageResponse(image_url=image_url)
    except AIConfigurationError as e:
        logger.error(f"Image provider misconfigured: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    except AIServiceError as e:
        logger.error(f"Image generation failed for '{request.location}': {e}")
        raise HTTPException(status_code=500, detail=str(e))
