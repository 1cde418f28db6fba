# routes/reports.py
"""
Report routes

1. /process-report - simplify a pasted report, save it when a user is given
2. /reports/{report_id} - fetch a saved report
3. /user/{user_id}/reports - list a user's saved reports
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.medical_report import MedicalReport, ProcessReportRequest
from services.database_service import ReportStorageError, report_storage
from services.report_processor import process_medical_report

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def _validation_message(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return "Invalid request"
    first = details[0]
    message = first["msg"].replace("Value error, ", "")
    field = ".".join(str(part) for part in first.get("loc", ()))
    return f"{field}: {message}" if field else message


def _parse_id(raw: str):
    try:
        return int(raw)
    except ValueError:
        return None


@router.post("/process-report")
async def process_report(request: Request):
    """
    Identify medical terms in a report and rewrite it in plain language.

    Body: {originalText, isAnonymized?, userId?, language?}
    The report is only saved when userId is given.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.error("Error processing medical report: body is not valid JSON")
        return _error(400, "Invalid request")

    try:
        payload = ProcessReportRequest.model_validate(body)
    except ValidationError as e:
        message = _validation_message(e)
        logger.error(f"Error processing medical report: {message}")
        return _error(400, message)

    result = process_medical_report(payload.original_text)

    report = MedicalReport(
        user_id=payload.user_id,
        original_text=payload.original_text,
        simplified_text=result.simplified_text,
        identified_terms=result.identified_terms,
        created_at=datetime.now(timezone.utc).isoformat(),
        is_anonymized=payload.is_anonymized,
        language=payload.language
    )

    if payload.user_id:
        try:
            report = await report_storage.create_medical_report(report)
        except ReportStorageError as e:
            logger.error(f"Error saving medical report: {e}")
            return _error(500, str(e))

    response = report.to_json()
    response.pop("userId", None)
    return {"success": True, "report": response}


@router.get("/reports/{report_id}")
async def get_report(report_id: str):
    parsed_id = _parse_id(report_id)
    if parsed_id is None:
        return _error(400, "Invalid report ID")

    try:
        report = await report_storage.get_medical_report(parsed_id)
    except ReportStorageError as e:
        logger.error(f"Error fetching medical report: {e}")
        return _error(500, str(e))

    if not report:
        return _error(404, "Report not found")

    return {"success": True, "report": report.to_json()}


@router.get("/user/{user_id}/reports")
async def get_user_reports(user_id: str):
    parsed_id = _parse_id(user_id)
    if parsed_id is None:
        return _error(400, "Invalid user ID")

    try:
        reports = await report_storage.get_medical_reports_by_user_id(parsed_id)
    except ReportStorageError as e:
        logger.error(f"Error fetching user medical reports: {e}")
        return _error(500, str(e))

    return {"success": True, "reports": [report.to_json() for report in reports]}
