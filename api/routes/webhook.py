"""
Webhook endpoints receiving call-center events from the voice agent.
"""
import secrets
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from services.action_router import ActionError, resolve_heuristic, resolve_strict
from services.job_dispatcher import GENERIC_ERROR, JobDispatcher, describe_result
from utils.logger import logger


router = APIRouter()


def _authorized(request: Request) -> bool:
    """Check the shared secret header when one is configured."""
    expected = request.app.state.settings.vapi_webhook_secret
    if not expected:
        return True
    received = request.headers.get("x-vapi-secret", "")
    return secrets.compare_digest(received.encode(), expected.encode())


def _dispatcher(request: Request) -> JobDispatcher:
    """Build a dispatcher with a fresh spreadsheet connection for this request."""
    settings = request.app.state.settings
    sheets = request.app.state.sheets_factory(settings)
    return JobDispatcher(sheets, settings)


async def _read_body(request: Request):
    body = await request.body()
    if not body:
        return {}
    return await request.json()


@router.options("/webhook")
@router.options("/vapi/webhook")
async def preflight():
    """CORS preflight."""
    return Response(status_code=204)


@router.post("/webhook")
async def action_webhook(request: Request):
    """
    Strict JSON webhook.

    Expects ``{"action": "...", "data": {...}}`` and answers with
    ``{success, message?, found?, job?}``.
    """
    if not _authorized(request):
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    try:
        body = await _read_body(request)
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    try:
        action_request = resolve_strict(body)
    except ActionError as e:
        logger.warning(f"Rejected webhook: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})

    try:
        result = _dispatcher(request).dispatch(action_request)
    except Exception as e:
        logger.error(f"Webhook error: {e}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "details": str(e)}
        )

    return JSONResponse(status_code=200, content=result.to_response())


@router.post("/vapi/webhook")
async def voice_agent_webhook(request: Request):
    """
    Voice-agent webhook answering in plain text.

    Accepts ``{"args": {...}}`` or the fields directly. The action may be given
    in ``args.action``, a top-level ``action`` or the ``action`` query parameter,
    and is otherwise inferred from the fields present. Always answers 200 with a
    sentence the agent can speak, errors included.
    """
    if not _authorized(request):
        return PlainTextResponse("Unauthorized", status_code=401)

    try:
        body = await _read_body(request)
    except ValueError:
        logger.warning("Voice-agent webhook received a non-JSON body")
        body = {}

    action_request = resolve_heuristic(body, request.query_params.get("action"))

    try:
        result = _dispatcher(request).dispatch(action_request) if action_request.action else None
    except Exception as e:
        logger.error(f"Voice-agent webhook error: {e}")
        return PlainTextResponse(GENERIC_ERROR, status_code=200)

    return PlainTextResponse(describe_result(result), status_code=200)
