from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from clauseclear.deps import get_gateway
from clauseclear.errors import (
    ClauseClearError,
    ConfigurationError,
    ExtractionError,
    UnsupportedFileTypeError,
)
from clauseclear.schemas import AnalyzeResponse, ExtractResponse
from clauseclear.services.ai_analyzer import analyze_contract
from clauseclear.services.extract_text import extract_text
from clauseclear.services.gemini import GeminiGateway

router = APIRouter(prefix="/api", tags=["documents"])


def _status_for(error: ClauseClearError) -> int:
    if isinstance(error, UnsupportedFileTypeError):
        return 415
    if isinstance(error, ExtractionError):
        return 422
    if isinstance(error, ConfigurationError):
        return 503
    return 502


async def _read_contract(file: UploadFile) -> str:
    data = await file.read()
    try:
        return extract_text(file.content_type, data)
    except ClauseClearError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))


@router.post("/extract", response_model=ExtractResponse)
async def extract(contract: UploadFile = File(...)):
    """Extract text from a PDF or DOCX contract without calling the model."""
    text = await _read_contract(contract)
    return ExtractResponse(
        filename=contract.filename or "document",
        characters=len(text),
        preview=text[:1000],
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(contract: UploadFile = File(...), gateway: GeminiGateway = Depends(get_gateway)):
    """Upload a contract for full AI analysis: simplified clauses + risks + fairness."""
    text = await _read_contract(contract)
    try:
        result = await analyze_contract(gateway, text)
    except ClauseClearError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    return AnalyzeResponse(
        filename=contract.filename or "document",
        char_count=len(text),
        simplified_clauses=result.simplified_clauses,
        risks=result.risks,
        fairness=result.fairness,
    )
