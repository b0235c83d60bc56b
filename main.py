from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from apis import assignees, columns, tasks, websockets
from database import engine, dispose_engine
from settings import ENVIRONMENT, logger
# Imported so their tables are registered on SQLModel.metadata
from models.assignees import Assignee  # noqa: F401
from models.boards import BoardColumn, Task  # noqa: F401


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup and release pooled connections on shutdown."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    yield
    dispose_engine()


app = FastAPI(
    title="Team Tasks API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

# CORS middleware for development
if ENVIRONMENT == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

app.include_router(columns.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")
app.include_router(assignees.router, prefix="/api")
app.include_router(websockets.router, prefix="/api")


@app.get("/api/health")
async def root():
    """API health check."""
    return {"message": "Team Tasks API is running"}
