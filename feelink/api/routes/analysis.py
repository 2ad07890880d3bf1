"""
Emotion analysis endpoints
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...core.exceptions import ValidationError
from ...core.logging import get_logger, log_error
from ...domain.services.analysis import AnalysisRequest, EmotionAnalyzer
from ..dependencies import get_analyzer
from ..schemas import AnalyzeRequest, AnalyzeResponse

logger = get_logger("api.analysis")

router = APIRouter(tags=["analysis"])


@router.post("/chat", response_model=AnalyzeResponse)
@router.post("/v1/analyze", response_model=AnalyzeResponse)
async def analyze(
    body: AnalyzeRequest,
    request: Request,
    analyzer: EmotionAnalyzer = Depends(get_analyzer),
) -> AnalyzeResponse:
    """
    Classify the emotion of a text and suggest an activity

    Blank text is rejected with 400. Collaborator failures degrade
    silently; only unexpected errors produce a 500.
    """
    try:
        domain_request = AnalysisRequest(
            text=body.text,
            user_id=body.user_id,
            client_ip=request.client.host if request.client else None,
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})

    try:
        result = await analyzer.analyze(domain_request)
    except Exception as e:
        log_error(logger, e, {"endpoint": "analyze"})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return AnalyzeResponse(**result.to_dict())
