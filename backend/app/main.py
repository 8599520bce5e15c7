# backend/app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from backend.app import config
from backend.app.api import llm, transactions
from backend.app.db import init_db
from backend.app.errors import FinanceTrackerError, NotFoundError

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Personal Finance Tracker API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],  # ✅ ensures PUT/DELETE are allowed
    allow_headers=["*"],
)


@app.exception_handler(FinanceTrackerError)
async def finance_error_handler(request: Request, exc: FinanceTrackerError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    key = "message" if isinstance(exc, NotFoundError) else "error"
    return JSONResponse(status_code=exc.status_code, content={key: exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:]) or 'body'}: {err['msg']}" for err in exc.errors()
    )
    logger.warning("%s %s rejected: %s", request.method, request.url.path, details)
    return JSONResponse(status_code=400, content={"error": details})


@app.get("/", response_class=PlainTextResponse)
def root():
    return "📝 Personal Finance Tracker API is running!"


app.include_router(transactions.router, prefix="/api/transactions", tags=["transactions"])
app.include_router(llm.router, prefix="/api/llm", tags=["llm"])


def run():
    import uvicorn

    logger.info("🚀 Server is running on port: %s", config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
