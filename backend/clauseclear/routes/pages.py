from pathlib import Path
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from clauseclear.deps import get_gateway
from clauseclear.errors import UnsupportedFileTypeError
from clauseclear.schemas import AskLawyerRequest
from clauseclear.services.ai_analyzer import analyze_contract, ask_lawyer
from clauseclear.services.extract_text import extract_text
from clauseclear.services.gemini import GeminiGateway

logger = structlog.get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["pages"])

CHAT_FALLBACK = {
    "advice": "Sorry, I encountered an error.",
    "reasoning": "Please try your question again.",
}
EMPTY_QUESTION_ANSWER = {
    "advice": "Please ask a question about your contract.",
    "reasoning": "Type your question in the box below and it will be answered using the uploaded document.",
}


def _upload_form(request: Request, error: Optional[str] = None) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html", {"error": error})


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return _upload_form(request)


@router.post("/analyze", response_class=HTMLResponse)
async def analyze(request: Request, gateway: GeminiGateway = Depends(get_gateway)):
    """Upload a contract and render the simplified / risks / fairness dashboard."""
    async with request.form() as form:
        contract = form.get("contract")
        # a plain text field under the same name is treated as a missing upload
        if not isinstance(contract, UploadFile) or not contract.filename:
            return _upload_form(request, "No file uploaded.")
        return await _render_analysis(request, contract, gateway)


async def _render_analysis(request: Request, contract: UploadFile, gateway: GeminiGateway) -> HTMLResponse:
    data = await contract.read()
    try:
        contract_text = extract_text(contract.content_type, data)
        result = await analyze_contract(gateway, contract_text)
    except UnsupportedFileTypeError as e:
        logger.info("upload_rejected", filename=contract.filename, content_type=contract.content_type)
        return _upload_form(request, str(e))
    except Exception as e:
        logger.exception("analysis_failed", filename=contract.filename)
        return _upload_form(request, f"Failed to analyze the document. Reason: {e}")

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "file_name": contract.filename,
            "simplified_clauses": result.simplified_clauses,
            "risks": result.risks,
            "fairness": result.fairness,
            "contract_text": contract_text,
        },
    )


@router.post("/ask-lawyer")
async def ask_lawyer_route(request: Request, gateway: GeminiGateway = Depends(get_gateway)):
    """Answer one question about the contract. Body: {"contractText": "...", "userQuestion": "..."}"""
    try:
        body = AskLawyerRequest.model_validate_json(await request.body())
    except ValidationError as e:
        logger.warning("ask_lawyer_bad_request", errors=e.error_count())
        return JSONResponse(CHAT_FALLBACK, status_code=400)

    question = body.user_question.strip()
    if not question:
        return JSONResponse(EMPTY_QUESTION_ANSWER)

    try:
        answer = await ask_lawyer(gateway, body.contract_text, question)
    except Exception:
        logger.exception("ask_lawyer_failed")
        return JSONResponse(CHAT_FALLBACK, status_code=500)
    return answer.model_dump()
