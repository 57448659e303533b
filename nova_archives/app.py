import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from nova_archives.playback import Scheduler, SessionRegistry
from nova_archives.routes import router
from nova_archives import storage

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Cancel every pending typewriter/auto timer before the loop goes away.
    app.state.sessions.close_all()


def create_app(data_dir: Path | None = None, scheduler: Scheduler | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)

    app = FastAPI(title="Nova Archives", lifespan=lifespan)
    app.state.sessions = SessionRegistry(scheduler)
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
