"""API dependencies."""

from fastapi import Header, HTTPException, status

from app.core.config import get_settings


def require_service_secret(
    x_service_secret: str | None = Header(default=None, alias="x-service-secret"),
) -> None:
    """Check the shared secret header used for service-to-service calls."""
    settings = get_settings()
    if not settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Service secret is not configured.",
        )

    if x_service_secret != settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid service secret.",
        )
