"""
Main Application Entry Point.

This module serves the pull request harvester over HTTP. It wires:
- Configuration and logging
- The GraphQL miner and the JSON store
- The collection pipeline
- FastAPI routes and error handlers

Run directly to start the server on the configured host and port.
"""

from typing import Optional

from fastapi import FastAPI
import uvicorn

from config import Settings, settings, logger
from analyzers.collection import CollectionPipeline
from api.handlers import add_exception_handlers
from api.routes import router
from miners.base import PullRequestMiner
from miners.github_miner import GitHubGraphQLMiner
from storage.pr_store import PRStore


def build_pipeline(
    app_settings: Settings, miner: Optional[PullRequestMiner] = None
) -> CollectionPipeline:
    """
    Build a collection pipeline from settings.

    Args:
        app_settings (Settings): Application configuration.
        miner (Optional[PullRequestMiner]): Miner override; the GraphQL miner
            is used when omitted.

    Returns:
        CollectionPipeline: Ready-to-run pipeline.
    """
    return CollectionPipeline(
        app_settings,
        miner or GitHubGraphQLMiner.from_settings(app_settings),
        PRStore(app_settings.base_dir, app_settings.output_subdir),
    )


def create_app(
    app_settings: Settings = settings, pipeline: Optional[CollectionPipeline] = None
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        app_settings (Settings): Application configuration.
        pipeline (Optional[CollectionPipeline]): Pipeline override, used by tests.

    Returns:
        FastAPI: Configured application.
    """
    app = FastAPI(title=app_settings.app_name)
    app.state.pipeline = pipeline or build_pipeline(app_settings)
    app.include_router(router)
    add_exception_handlers(app, logger)
    return app


app = create_app()


if __name__ == "__main__":
    logger.info(
        {
            "message": "Starting application",
            "url": f"http://{settings.host}:{settings.port}",
        }
    )
    uvicorn.run(app, host=settings.host, port=settings.port)
