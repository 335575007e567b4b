"""
AI analysis: plain-language clauses, risk flags and a fairness score for contracts,
plus single follow-up questions answered against the contract text.
"""
import asyncio

import structlog

from clauseclear.schemas import AnalysisResult, LawyerAnswer
from clauseclear.services.gemini import GeminiGateway
from clauseclear.services.prompts import PromptKind, build_prompt

logger = structlog.get_logger(__name__)


async def analyze_contract(gateway: GeminiGateway, contract_text: str) -> AnalysisResult:
    """Run the simplify, risk and fairness calls concurrently.

    All three must succeed; the first failure cancels the calls still in
    flight and propagates, so no partial result is returned.
    """
    tasks = [
        asyncio.ensure_future(gateway.generate(build_prompt(kind, contract_text)))
        for kind in (PromptKind.SIMPLIFY, PromptKind.RISKS, PromptKind.FAIRNESS)
    ]
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()

    failed = [task for task in tasks if task in done and task.exception() is not None]
    if failed:
        # wait for the cancelled siblings so none outlives the gateway
        await asyncio.gather(*pending, return_exceptions=True)
        raise failed[0].exception()

    simplified, risks, fairness = (task.result() for task in tasks)

    logger.info(
        "contract_analyzed",
        clauses=len(simplified.clauses),
        risks=len(risks.risks),
        fairness_score=fairness.fairness_score,
    )
    return AnalysisResult(
        simplified_clauses=simplified.clauses,
        risks=risks.risks,
        fairness=fairness,
    )


async def ask_lawyer(gateway: GeminiGateway, contract_text: str, question: str) -> LawyerAnswer:
    answer = await gateway.generate(build_prompt(PromptKind.CHAT, contract_text, question))
    return answer
