import logging
import uuid
from fastapi import Request

from .config import settings

logger = logging.getLogger("bitcoin_price_mcp")

def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

async def request_logging_middleware(request: Request, call_next):
    cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
    request.state.correlation_id = cid
    logger.info("Received %s request for %s", request.method, request.url.path)
    response = await call_next(request)
    response.headers["x-correlation-id"] = cid
    return response
