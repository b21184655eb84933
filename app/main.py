from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.core.config import REALTIME_BACKEND
from app.core.logging import setup_logging
from app.core.init_db import init_db
from app.api.router import api_router
from app.realtime.context import RealtimeContext
from app.realtime.store import RealtimeStoreError

from dotenv import load_dotenv
load_dotenv()

setup_logging()
logger.info("Starting realtime dispatch backend")


app = FastAPI(
    title="Realtime Dispatch Backend",
    version="0.1.0"
)

# One realtime handle per process; connects lazily on first use
app.state.realtime = RealtimeContext(backend=REALTIME_BACKEND)

# All API routes (presence, dispatch, active orders, route cache, users, zones)
app.include_router(api_router)


@app.exception_handler(RealtimeStoreError)
async def realtime_store_error_handler(request: Request, exc: RealtimeStoreError):
    logger.error(f"Realtime store failure | {request.method} {request.url.path} | {exc}")
    return JSONResponse(status_code=502, content={"detail": "Realtime store unavailable"})


# Init DB after app is created
init_db()

@app.get("/health")
def health():
    logger.debug("Health check hit")
    return {
        "status": "ok",
        "realtime": app.state.realtime.connected,
    }
