from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/ready")
def ready(request: Request):
    session = getattr(request.app.state, "portfolio_session", None)
    polling = bool(session and session.is_running())
    return {
        "status": "ready" if polling else "not_ready",
        "polling": polling,
    }
