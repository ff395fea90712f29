import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from moonphase.api.public import router as public_router
from moonphase.core.config import service_config
from moonphase.core.dates import DateParseError

log = logging.getLogger("moonphase.api.app")

app = FastAPI(title="moon phase api")
app.include_router(public_router)


@app.exception_handler(DateParseError)
async def date_parse_error_handler(request: Request, exc: DateParseError) -> JSONResponse:
    log.info("rejected %s: kind=%s value=%r", request.url.path, exc.kind.value, exc.value)
    return JSONResponse({"error": exc.message}, status_code=400)


@app.get("/health", tags=["health"])
def health() -> dict:
    return {
        "ok": True,
        "service": service_config().service_name,
        "ts": datetime.now(timezone.utc).isoformat(),
    }
