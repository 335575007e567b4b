"""Shared pytest fixtures: a stubbed Gemini endpoint, sample contracts and a test client."""

import io
import json

import httpx
import pytest
from docx import Document
from fastapi.testclient import TestClient

from clauseclear.config import Settings
from clauseclear.deps import get_gateway
from clauseclear.main import create_app
from clauseclear.services.gemini import GeminiGateway

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

CONTRACT_LINES = [
    "RESIDENTIAL LEASE AGREEMENT",
    "The Tenant shall pay rent of $1,200 on the first day of each month.",
    "The Landlord may terminate this lease at any time without notice.",
]

SIMPLIFY_REPLY = {
    "clauses": [
        {
            "original": "The Tenant shall pay rent of $1,200 on the first day of each month.",
            "simplified": "You pay $1,200 rent on the 1st of every month.",
            "explanation": "Rent is due monthly, in advance.",
        },
        {
            "original": "The Landlord may terminate this lease at any time without notice.",
            "simplified": "The landlord can end the lease whenever they want.",
            "explanation": "You could lose your home with no warning.",
        },
    ]
}

RISKS_REPLY = {
    "risks": [
        {
            "clause": "The Landlord may terminate this lease at any time without notice.",
            "risk_type": "Termination",
            "reason": "One-sided termination right with no notice period.",
            "severity": "high",
        }
    ]
}

FAIRNESS_REPLY = {
    "fairness_score": 3,
    "favored_party": "Landlord",
    "reason": "The landlord can terminate at will while the tenant cannot.",
}

CHAT_REPLY = {
    "advice": "No, you cannot end the lease early without penalty.",
    "reasoning": "The lease gives only the landlord a termination right.",
}

_KIND_BY_FIRST_FIELD = {
    "clauses": "simplify",
    "risks": "risks",
    "fairness_score": "fairness",
    "advice": "chat",
}


def envelope(payload) -> dict:
    """Wrap a payload the way generateContent does."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": json.dumps(payload)}]}}
        ]
    }


class FakeGemini:
    """MockTransport handler that answers per task and records every request."""

    def __init__(self):
        self.replies = {
            "simplify": SIMPLIFY_REPLY,
            "risks": RISKS_REPLY,
            "fairness": FAIRNESS_REPLY,
            "chat": CHAT_REPLY,
        }
        self.failures: dict[str, tuple[int, str]] = {}
        self.requests: list[dict] = []

    def prompts(self, kind=None) -> list[str]:
        return [r["prompt"] for r in self.requests if kind is None or r["kind"] == kind]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        schema = body["generationConfig"]["responseSchema"]
        kind = _KIND_BY_FIRST_FIELD[schema["required"][0]]
        self.requests.append({
            "kind": kind,
            "prompt": body["contents"][0]["parts"][0]["text"],
            "url": request.url,
        })
        if kind in self.failures:
            status, message = self.failures[kind]
            return httpx.Response(status, json={"error": {"code": status, "message": message}})
        return httpx.Response(200, json=envelope(self.replies[kind]))


@pytest.fixture
def settings():
    return Settings(
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_base_url="https://gemini.test/v1beta",
    )


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def app(settings, fake_gemini):
    app = create_app(settings)

    async def _gateway():
        async with GeminiGateway(settings, transport=httpx.MockTransport(fake_gemini)) as gateway:
            yield gateway

    app.dependency_overrides[get_gateway] = _gateway
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def contract_docx() -> bytes:
    doc = Document()
    for line in CONTRACT_LINES:
        doc.add_paragraph(line)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def _pdf_with_text(text: str) -> bytes:
    stream = b"BT /F1 12 Tf 72 720 Td (" + text.encode("latin-1") + b") Tj ET"
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, obj in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + obj + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


@pytest.fixture
def contract_pdf() -> bytes:
    return _pdf_with_text("The Tenant shall pay rent monthly.")
