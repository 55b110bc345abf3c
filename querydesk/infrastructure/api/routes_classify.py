"""Classifier endpoint — the single-route classify function.

Every response, including the OPTIONS preflight, carries permissive CORS
headers; every failure is answered as ``{"error": <message>}``.
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from querydesk.application.use_cases.classify_query import ClassifyQueryUseCase
from querydesk.domain.errors import ClassificationError
from querydesk.infrastructure.api.dependencies import get_classify_query_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["classifier"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def read_json_body(request: Request):
    """Return the decoded JSON body, or None when it is absent or not JSON."""
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


def error_response(error: ClassificationError) -> JSONResponse:
    return JSONResponse(error.to_payload(), status_code=error.status_code, headers=CORS_HEADERS)


@router.options("/classify-query")
async def classify_query_preflight():
    """CORS preflight: answered immediately, no body."""
    return Response(status_code=204, headers=CORS_HEADERS)


@router.post("/classify-query")
async def classify_query(
    request: Request,
    classify_uc: ClassifyQueryUseCase = Depends(get_classify_query_uc),
):
    """Classify ``{"queryText": ...}`` into category/priority/sentiment/keyPhrases."""
    body = await read_json_body(request)
    try:
        classification = await classify_uc.execute(body)
    except ClassificationError as e:
        logger.warning(
            "Classification failed at %s: %s (%d)",
            e.stage.value if e.stage else "unknown", e.message, e.status_code,
        )
        return error_response(e)

    return JSONResponse(classification, status_code=200, headers=CORS_HEADERS)
