"""
Prompt construction for each analysis task.
Every prompt travels with the response schema the model must follow and the
pydantic model that validates the reply.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from clauseclear.schemas import ClauseList, FairnessAssessment, LawyerAnswer, RiskReport


class PromptKind(str, Enum):
    SIMPLIFY = "simplify"
    RISKS = "risks"
    FAIRNESS = "fairness"
    CHAT = "chat"


@dataclass(frozen=True)
class Prompt:
    kind: PromptKind
    text: str
    response_schema: dict[str, Any]
    response_model: type[BaseModel]


def _string() -> dict[str, str]:
    return {"type": "STRING"}


SIMPLIFY_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "clauses": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "original": _string(),
                    "simplified": _string(),
                    "explanation": _string(),
                },
                "required": ["original", "simplified", "explanation"],
            },
        }
    },
    "required": ["clauses"],
}

RISKS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "risks": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "clause": _string(),
                    "risk_type": _string(),
                    "reason": _string(),
                    "severity": _string(),
                },
                "required": ["clause", "risk_type", "reason", "severity"],
            },
        }
    },
    "required": ["risks"],
}

FAIRNESS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "fairness_score": {"type": "NUMBER"},
        "favored_party": _string(),
        "reason": _string(),
    },
    "required": ["fairness_score", "favored_party", "reason"],
}

CHAT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "advice": _string(),
        "reasoning": _string(),
    },
    "required": ["advice", "reasoning"],
}

JSON_ONLY = "Respond ONLY with valid JSON that matches the provided response schema. Do not add any other text."

SIMPLIFY_TEMPLATE = """You are helping a non-lawyer understand a contract before signing it.

Split the contract below into its individual clauses. For each clause return:
- "original": the clause text as written
- "simplified": the same clause rewritten in plain, everyday language
- "explanation": one or two sentences on what it means for the reader

{json_only}
Shape: {{"clauses": [{{"original": "...", "simplified": "...", "explanation": "..."}}]}}

Contract:
{contract_text}"""

RISKS_TEMPLATE = """You are reviewing a contract for a person who is about to sign it.

Identify clauses that are risky, unusual or one-sided. For each one return:
- "clause": a quote of the clause
- "risk_type": the kind of risk (e.g. financial, legal, termination, privacy)
- "reason": why it is concerning
- "severity": one of "low", "medium" or "high"

Flag genuinely concerning clauses, not normal boilerplate.
{json_only}
Shape: {{"risks": [{{"clause": "...", "risk_type": "...", "reason": "...", "severity": "low|medium|high"}}]}}

Contract:
{contract_text}"""

FAIRNESS_TEMPLATE = """Assess how balanced the following contract is between its parties.

Return:
- "fairness_score": a number from 0 (entirely one-sided) to 10 (perfectly balanced)
- "favored_party": the party the contract favors, or "Neither" if it is balanced
- "reason": a short justification

{json_only}
Shape: {{"fairness_score": 0, "favored_party": "...", "reason": "..."}}

Contract:
{contract_text}"""

CHAT_TEMPLATE = """You are a lawyer providing clear, concise, and actionable advice.
Analyze the document and the user's question. Provide your answer in the following JSON structure ONLY:
{{
  "advice": "A short, direct answer to the user's question (1-2 sentences). Start with 'Yes' or 'No' if possible.",
  "reasoning": "A brief explanation for your advice based on the document's content (2-3 sentences)."
}}
Do not state or imply that you are an AI. If the document is a standard form, explain its purpose simply in your reasoning.
{json_only}

Contract Text: "{contract_text}"
User's Question: "{question}"
"""

_TASKS: dict[PromptKind, tuple[str, dict[str, Any], type[BaseModel]]] = {
    PromptKind.SIMPLIFY: (SIMPLIFY_TEMPLATE, SIMPLIFY_SCHEMA, ClauseList),
    PromptKind.RISKS: (RISKS_TEMPLATE, RISKS_SCHEMA, RiskReport),
    PromptKind.FAIRNESS: (FAIRNESS_TEMPLATE, FAIRNESS_SCHEMA, FairnessAssessment),
    PromptKind.CHAT: (CHAT_TEMPLATE, CHAT_SCHEMA, LawyerAnswer),
}


def build_prompt(kind: PromptKind, contract_text: str, question: Optional[str] = None) -> Prompt:
    kind = PromptKind(kind)
    template, schema, model = _TASKS[kind]
    if kind is PromptKind.CHAT:
        if question is None:
            raise ValueError("A question is required to build a chat prompt.")
        text = template.format(json_only=JSON_ONLY, contract_text=contract_text, question=question)
    else:
        text = template.format(json_only=JSON_ONLY, contract_text=contract_text)
    return Prompt(kind=kind, text=text, response_schema=schema, response_model=model)
