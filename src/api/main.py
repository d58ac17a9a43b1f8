import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.routes.analyze import router as analyze_router
from src.api.routes.recall import router as recall_router
from src.config import settings
from src.errors import InvalidInput, MeetingRecallError

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Meeting Recall API",
    description="Recall bot tracking and meeting-worth-it decisions",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8501",
    ],
    allow_origin_regex=r"https://.*\.vercel\.app|http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recall_router)
app.include_router(analyze_router)


@app.exception_handler(MeetingRecallError)
async def recall_error_handler(request: Request, exc: MeetingRecallError) -> JSONResponse:
    # Return JSON (not a bare 500) so the browser keeps CORS headers.
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", exc.kind, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = InvalidInput(f"Invalid request: {exc.errors()[0]['msg']}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


def main() -> None:
    """Serve the API on the configured host and port."""
    uvicorn.run("src.api.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
