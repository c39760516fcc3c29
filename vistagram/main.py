from datetime import datetime, timezone
import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vistagram.core.config import settings
from vistagram.core.errors import register_exception_handlers
from vistagram.db.session import mongo
from vistagram.middleware.request_logging import RequestLoggingMiddleware
from vistagram.modules.photos.api.router import router as photos_router
from vistagram.modules.posts.api.router import router as posts_router
from vistagram.modules.posts.comments.api.router import router as comments_router
from vistagram.modules.posts.likes.api.router import router as likes_router
from vistagram.modules.users.api.router import router as users_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("vistagram")

# Initialize the FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    debug=settings.DEBUG,
    description="Photo sharing timeline: photos, posts, likes and comments",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)
register_exception_handlers(app)

@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting server in {settings.ENVIRONMENT} mode")
    # Requests are accepted while MongoDB is still being reached
    app.state.db_connect_task = asyncio.create_task(mongo.connect())

@app.on_event("shutdown")
async def shutdown_event():
    task = getattr(app.state, "db_connect_task", None)
    if task is not None and not task.done():
        task.cancel()
    mongo.close()

# Add middleware
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register API routers
app.include_router(photos_router, prefix=f"{settings.API_PREFIX}/photos", tags=["photos"])
app.include_router(posts_router, prefix=f"{settings.API_PREFIX}/posts", tags=["posts"])
app.include_router(comments_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/comments", tags=["comments"])
app.include_router(likes_router, prefix=f"{settings.API_PREFIX}/posts/{{post_id}}/like", tags=["likes"])
app.include_router(users_router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])

@app.get(f"{settings.API_PREFIX}/health")
async def health_check():
    return {
        "status": "ok",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": mongo.state.value,
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vistagram.main:app", host=settings.HOST, port=settings.PORT, reload=True)
