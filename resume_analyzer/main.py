import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resume_analyzer.config import settings
from resume_analyzer.errors import ResumeAnalyzerError

# Import routers
from resume_analyzer.routers import analyze, resumes, analyses

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Resume Analyzer API",
    description="FastAPI backend to upload resumes and generate AI career analyses.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResumeAnalyzerError)
async def resume_analyzer_error_handler(request: Request, exc: ResumeAnalyzerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(
        ".".join(str(part) for part in error["loc"] if part != "body")
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400, content={"error": f"Invalid request: {fields or 'body'}"}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) or "An unknown error occurred"
    return JSONResponse(status_code=500, content={"error": message})


# The analyze function is reachable both at the root path and with the API prefix.
app.include_router(analyze.router, tags=["Resume Analysis"])
app.include_router(analyze.router, prefix="/api/v1", tags=["Resume Analysis"])
app.include_router(resumes.router, prefix="/api/v1", tags=["Resume Upload"])
app.include_router(analyses.router, prefix="/api/v1", tags=["Analysis History"])


@app.get("/")
async def root():
    return {"message": "Resume Analyzer API is running. Use endpoints under /api/v1/"}


# Local development runner
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("resume_analyzer.main:app", host="127.0.0.1", port=8000, reload=True)
