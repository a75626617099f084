"""
Health check routes - public, no external calls.
"""
from fastapi import APIRouter, Request

router = APIRouter()


@router.get(
    "",
    summary="System health check",
)
async def health_check(request: Request):
    """
    Check system health status.

    Reports configuration and whether the Google Sheets and Gemini clients
    have been opened yet. Never contacts either service.
    """
    import config

    health = {
        "status": "healthy",
        "service": config.PORTAL_TITLE,
        "version": config.PORTAL_VERSION,
        "components": {}
    }

    missing = []
    if not config.GOOGLE_SHEET_ID:
        missing.append("GOOGLE_SHEET_ID")
    if not config.GOOGLE_API_KEY:
        missing.append("GOOGLE_API_KEY")
    if missing:
        health["components"]["config"] = f"missing: {', '.join(missing)}"
        health["status"] = "degraded"
    else:
        health["components"]["config"] = "ok"

    state = request.app.state
    health["components"]["sheets"] = (
        "connected" if getattr(state, "customer_source", None) is not None else "not_connected"
    )
    health["components"]["gemini"] = (
        "connected" if getattr(state, "summary_generator", None) is not None else "not_connected"
    )

    return health
