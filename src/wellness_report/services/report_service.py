"""Report service: validate a submission, fetch analysis, compose the PDF."""

from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool

from wellness_report.analysis.provider import IAnalysisProvider, analyze_with_fallback
from wellness_report.composer.composer import ReportComposer
from wellness_report.exceptions import ValidationError
from wellness_report.models import LogoImage, ReportRecord, ReportRequest
from wellness_report.persistence.protocols import IReportSink

log = logging.getLogger(__name__)

_DATA_URL_RE = re.compile(r"^data:(image/\w+);base64,(.+)$", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

NAME_REQUIRED_MESSAGE = "Nome é obrigatório"
INVALID_EMAIL_MESSAGE = "Email deve ser um texto"


# ── Input decoding / validation ──────────────────────────────────────


def parse_logo_data_url(value: Any) -> Optional[LogoImage]:
    """Decode a ``data:image/<ext>;base64,...`` URL.

    Returns None for a missing value, a non-image or malformed URL, or bad
    base64.  Pixel decoding is left to the composer.
    """
    if not value:
        return None
    if not isinstance(value, str):
        log.warning("Ignoring logo: expected a data URL string, got %s", type(value).__name__)
        return None
    match = _DATA_URL_RE.match(value.strip())
    if match is None:
        log.warning("Ignoring logo: not a base64 image data URL")
        return None
    try:
        data = base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError) as exc:
        log.warning("Ignoring logo: invalid base64 payload (%s)", exc)
        return None
    if not data:
        log.warning("Ignoring logo: empty payload")
        return None
    return LogoImage(mime_type=match.group(1), data=data)


def _normalize_answers(answers: Any) -> dict[str, str]:
    if answers is None:
        return {}
    if not isinstance(answers, Mapping):
        raise ValidationError("As respostas devem ser um objeto de pergunta → resposta")

    normalized: dict[str, str] = {}
    for question, answer in answers.items():
        if isinstance(answer, (Mapping, list, tuple, set)):
            raise ValidationError(f"Resposta estruturada não suportada para a pergunta: {question}")
        normalized[str(question)] = "" if answer is None else str(answer)
    return normalized


def build_report_request(
    name: Any,
    email: Any = None,
    answers: Any = None,
    logo_data_url: Any = None,
) -> ReportRequest:
    """Turn an untrusted payload into a ``ReportRequest``.

    Raises ``ValidationError`` for a blank name, a non-string email or
    structured answer values.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(NAME_REQUIRED_MESSAGE)
    if email is not None and not isinstance(email, str):
        raise ValidationError(INVALID_EMAIL_MESSAGE)
    return ReportRequest(
        submitter_name=name.strip(),
        submitter_email=(email or "").strip() or None,
        answers=_normalize_answers(answers),
        logo=parse_logo_data_url(logo_data_url),
    )


# ── Delivery naming ──────────────────────────────────────────────────


def report_filename(name: str) -> str:
    """``relatorio_<name>.pdf`` with each whitespace run replaced by ``_``."""
    return f"relatorio_{_WHITESPACE_RE.sub('_', name)}.pdf"


def content_disposition(filename: str) -> str:
    """Attachment header; adds an RFC 5987 ``filename*`` when latin-1 cannot carry the name."""
    safe = filename.replace('"', "").replace("\\", "")
    try:
        safe.encode("latin-1")
    except UnicodeEncodeError:
        fallback = safe.encode("ascii", errors="replace").decode("ascii")
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(safe)}"
    return f'attachment; filename="{safe}"'


# ── Orchestration ────────────────────────────────────────────────────


@dataclass(frozen=True)
class GeneratedReport:
    """Finished PDF plus the record to persist once it has been delivered."""

    pdf: bytes
    record: ReportRecord
    filename: str


class ReportService:
    """Analysis → composition pipeline behind ``POST /api/analyze``."""

    def __init__(
        self,
        provider: IAnalysisProvider,
        composer: ReportComposer,
        sink: IReportSink,
    ) -> None:
        self._provider = provider
        self._composer = composer
        self._sink = sink

    async def generate(self, request: ReportRequest) -> GeneratedReport:
        """Produce the PDF for *request*.  Raises ``RenderError`` if composition fails."""
        analysis = await analyze_with_fallback(self._provider, request)
        # CPU-bound; keep the event loop free
        pdf = await run_in_threadpool(self._composer.compose, request, analysis)
        record = ReportRecord(
            name=request.submitter_name,
            email=request.submitter_email,
            answers=dict(request.answers),
            analysis=analysis,
        )
        log.info(
            "Report generated",
            extra={"bytes": len(pdf), "answers": len(request.answers)},
        )
        return GeneratedReport(pdf=pdf, record=record, filename=report_filename(request.submitter_name))

    def persist(self, record: ReportRecord) -> None:
        """Fire-and-forget save; failures are logged and swallowed."""
        try:
            saved = self._sink.save(record)
        except Exception:
            log.exception("Report sink raised while saving")
            return
        if saved is None:
            log.debug("Report not persisted")

    def list_reports(self) -> list[dict[str, Any]]:
        return self._sink.list_reports()
