from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response, StreamingResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging import logger, setup_logging, request_logging_middleware
from .router import ToolRouter
from .streaming import EventStream

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "OPTIONS, POST, GET",
    "Access-Control-Allow-Headers": "Content-Type",
}

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Bitcoin Price MCP server listening on port %s", settings.port)
    logger.info("Available tools:")
    for name in router.registry.names:
        logger.info("- %s: %s", name, router.registry.get(name).descriptor.description)
    logger.info("Server is ready for connections at %s", settings.events_url)
    yield
    logger.info("Shutting down server...")

setup_logging()
app = FastAPI(title="Bitcoin Price MCP", version="0.1.0", lifespan=lifespan)

router = ToolRouter()

EXECUTIONS = Counter("bitcoin_mcp_executions_total", "Tool executions", ["outcome"])
LAT = Histogram("bitcoin_mcp_execution_duration_ms", "Execution duration in ms")

async def cors_middleware(request: Request, call_next):
    # Preflight never reaches a handler
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response

# Last registered runs first: CORS wraps request logging.
app.middleware("http")(request_logging_middleware)
app.middleware("http")(cors_middleware)

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unmatched path or method is a 404 for callers
    if exc.status_code in (404, 405):
        return JSONResponse({"error": {"message": "Not found"}}, status_code=404)
    return JSONResponse({"error": {"message": str(exc.detail)}}, status_code=exc.status_code)

@app.get("/")
def discovery():
    return Response(router.registry.discovery_json(), media_type="application/json")

@app.get("/health")
def health():
    return {"status": "healthy"}

@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

@app.get("/events")
async def events():
    stream = EventStream(router.registry.discovery_json(), heartbeat_seconds=settings.heartbeat_seconds)
    return StreamingResponse(
        stream.events(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )

@app.post("/execute")
async def execute(request: Request):
    # Whole body first; provider calls block, so they run off the event loop
    body = await request.body()
    routed = await run_in_threadpool(router.handle, body)
    EXECUTIONS.labels(outcome=routed.outcome).inc()
    LAT.observe(routed.elapsed_ms)
    return JSONResponse(routed.result.to_wire(), status_code=routed.status_code)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bitcoin_price_mcp.main:app", host=settings.host, port=settings.port)
