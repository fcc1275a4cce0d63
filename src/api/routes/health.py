import asyncio

import pika
from fastapi import APIRouter, Depends, Request
from sqlalchemy import text

from src.api.dependencies import get_settings
from src.config import Settings

router = APIRouter(tags=["health"])


def _check_rabbitmq(url: str) -> None:
    connection = pika.BlockingConnection(pika.URLParameters(url))
    connection.close()


@router.get("/health")
async def health_check(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> dict:  # type: ignore[type-arg]
    """Liveness + dependency health check."""
    db_status = "connected"
    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        db_status = f"error: {exc}"

    rabbitmq_status = "disabled"
    if settings.rabbitmq_url:
        rabbitmq_status = "connected"
        try:
            await asyncio.get_running_loop().run_in_executor(
                None, _check_rabbitmq, settings.rabbitmq_url
            )
        except Exception as exc:
            rabbitmq_status = f"error: {exc}"

    healthy = db_status == "connected" and rabbitmq_status in ("connected", "disabled")

    return {
        "status": "healthy" if healthy else "degraded",
        "database": db_status,
        "rabbitmq": rabbitmq_status,
    }
