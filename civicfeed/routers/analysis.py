# File: civicfeed/routers/analysis.py
from fastapi import APIRouter, Depends, Request
from civicfeed.core.config import settings
from civicfeed.core.errors import ValidationError
from civicfeed.core.ratelimit import limiter
from civicfeed.db.session import get_classifier
from civicfeed.schemas.issue import AIAnalysis, AnalyzeIn
from civicfeed.services.collage import composite_image

router = APIRouter(prefix="/api", tags=["analysis"])

@router.post("/analyze-issue", response_model=AIAnalysis)
@limiter.limit(settings.rate_limit_analyze)
def analyze_issue(request: Request, body: AnalyzeIn, classifier=Depends(get_classifier)):
    description = (body.description or "").strip()
    if not description:
        raise ValidationError("Description is required", field="description")
    image = composite_image(
        body.image_base64,
        body.images,
        tile_size=settings.collage_tile_size,
        max_images=settings.collage_max_images,
    )
    return classifier.analyze(description, image)
