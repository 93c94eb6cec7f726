"""
FastAPI application entry point.

Serves the campaign story wizard: question catalog, sessions, story
generation and export. Sessions live in memory for the life of the process.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campaign_story import __version__
from ..config import get_settings
from ..infra.logging_config import setup_logging
from ..session.store import init_store
from ..story.generator import StoryGenerator, init_generator
from .dependencies import get_story_generator
from .routers import questions, sessions, story

load_dotenv()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Logging
    - Fresh in-memory session store
    - Story generator (Vertex AI availability decided once, here)
    """
    logger = setup_logging(settings.log_level, settings.log_dir)
    init_store()
    generator = init_generator(settings)
    logger.info(f"[API] Campaign story API v{__version__} started - generation: {generator.mode}")

    yield

    logger.info("[API] Shutdown complete")


# Tag metadata for Swagger UI
tags_metadata = [
    {
        "name": "questions",
        "description": "Questionnaire catalog in presentation order",
    },
    {
        "name": "sessions",
        "description": "Creator sessions - answers, tone and export",
    },
    {
        "name": "story",
        "description": "Story draft generation (Vertex AI with mock fallback, never fails)",
    },
]

app = FastAPI(
    title="Campaign Story API",
    lifespan=lifespan,
    description="""
## Campaign Story API

Guides a fundraising-campaign creator through a fixed questionnaire and
drafts a first-person story from the answers.

### Story generation
When `GOOGLE_CLOUD_PROJECT` is set, stories are generated with Vertex AI.
Otherwise, or when the service fails, a clearly labeled mock story is
returned instead. `/generate-story` always responds with 200.

### Usage
```bash
# Start server
uvicorn campaign_story.api.main:app --host 127.0.0.1 --port 3001

# Create a session
curl -X POST http://localhost:3001/sessions
```

### Note
Sessions are kept in memory and are lost on restart.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.get(f"{settings.api_prefix}/health")
async def health_check(generator: StoryGenerator = Depends(get_story_generator)):
    """Liveness probe. Always 200."""
    return {
        "status": "ok",
        "version": __version__,
        "generation": generator.mode,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


app.include_router(questions.router, prefix=settings.api_prefix, tags=["questions"])
app.include_router(sessions.router, prefix=settings.api_prefix, tags=["sessions"])
app.include_router(story.router, prefix=settings.api_prefix, tags=["story"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
