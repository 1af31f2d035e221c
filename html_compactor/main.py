"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from html_compactor.api.routes import router
from html_compactor.config import settings
from html_compactor.utils.logging import get_logger

log = get_logger(__name__)

app = FastAPI(
    title="HTML Compactor",
    description=(
        "Shrinks captured HTML documents with composable regex, sanitizer and "
        "tree-walking strategies before they are sent to an LLM for editing."
    ),
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("html_compactor.main:app", host="0.0.0.0", port=8000, reload=True)
