from fastapi import FastAPI

from profile_api.core.logger import setup_logger
from profile_api.models.database import Base, engine
from profile_api.models import user  # noqa: F401  registers the users table
from profile_api.routers import users

setup_logger()

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Profile Image API")

# include our routers
app.include_router(users.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
