"""Questionnaire analysis endpoint returning the PDF report."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import Response
from pydantic import AliasChoices, BaseModel, Field

from wellness_report.api.dependencies import get_report_service
from wellness_report.services.report_service import (
    ReportService,
    build_report_request,
    content_disposition,
)

router = APIRouter(tags=["reports"])


class AnalyzeRequest(BaseModel):
    """Raw questionnaire submission.

    Fields stay loosely typed so that a missing name or a structured answer
    is reported as a 400 with a readable message, not a schema error.
    """

    name: Any = None
    email: Any = None
    responses: Any = Field(default=None, validation_alias=AliasChoices("responses", "answers"))
    logo_base64: Any = Field(default=None, validation_alias=AliasChoices("logoBase64", "logo_base64"))


@router.post(
    "/analyze",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}, "description": "PDF report"}},
)
async def analyze(
    payload: AnalyzeRequest,
    background_tasks: BackgroundTasks,
    service: ReportService = Depends(get_report_service),
) -> Response:
    """Analyze a submission and stream back the rendered PDF.

    The record is persisted after the response has been sent; a sink
    failure never affects the delivered document.
    """
    request = build_report_request(payload.name, payload.email, payload.responses, payload.logo_base64)
    report = await service.generate(request)
    background_tasks.add_task(service.persist, report.record)
    return Response(
        content=report.pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(report.filename)},
    )
