"""
Web App Deployer REST API.

Run with:
    uvicorn webapp_deployer.rest_api:app
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .api import deployment, descriptor
from .logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("API Startup.")
    yield


app = FastAPI(
    title="Web App Deployer API",
    version=__version__,
    description="API for rendering, deploying and inspecting the hosted chat web app environment.",
    openapi_tags=[
        {
            "name": "Descriptor",
            "description": "Offline operations: render the ARM template and show the deployment plan."
        },
        {
            "name": "Infrastructure",
            "description": "Deploy the environment and check which resources exist."
        }
    ],
    lifespan=lifespan
)

app.include_router(descriptor.router)
app.include_router(deployment.router)


@app.get("/", tags=["Descriptor"])
def read_root():
    return {"status": "API is running", "version": __version__}
