"""Health check endpoint."""

from fastapi import APIRouter, Request

from run_wasm import __version__

router = APIRouter()


@router.get("/health")
def health(request: Request) -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status, version and the name of the served bundle.
    """
    return {
        "status": "ok",
        "version": __version__,
        "bundle": request.app.state.bundle_name,
    }
