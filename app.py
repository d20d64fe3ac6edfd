#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Concurrency: requests are served concurrently via async I/O (FastAPI +
asyncpg connection pool + redis.asyncio). Link creation locks per slug
within a process; with WORKERS > 1 the database primary key keeps slugs
unique across processes.

Usage:
    python app.py

Environment variables:
    POSTGRES_URL - PostgreSQL connection URL
    POSTGRES_CREATE_TABLES - Set to true to create the table on startup
    REDIS_URL - Redis connection URL
    BASE_URL - Base URL for short links
    SLUG_LENGTH - Length of generated slugs
    DEFAULT_EXPIRE_DAYS - Lifetime of links created without an expiry
    REAPER_INTERVAL_SECONDS - Interval between expired-row sweeps
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from shortlink.storage.postgres import URLRecordPostgresStore
from shortlink.storage.cache import RedisCache
from shortlink.storage.coordinator import PersistenceCoordinator
from shortlink.storage.reaper import ExpiredRecordReaper
from shortlink.service import URLShortenerService
from shortlink.slug import SlugGenerator
from shortlink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlink service...")

    durable = URLRecordPostgresStore(
        db_config=config.postgres_url,
        pool_max_size=config.db_pool_max_size,
        connection_timeout_seconds=config.db_timeout_seconds,
        create_tables=config.postgres_create_tables,
        logger=logger,
    )
    logger.info(f"Using PostgreSQL at {durable.host}:{durable.port}/{durable.database}")

    cache = RedisCache(
        redis_url=config.redis_url,
        key_prefix=config.cache_key_prefix,
        logger=logger,
    )
    await cache.connect()

    service = URLShortenerService(
        persistence=PersistenceCoordinator(durable=durable, cache=cache, logger=logger),
        slug_generator=SlugGenerator(length=config.slug_length),
        default_expire_days=config.default_expire_days,
        logger=logger,
    )
    app.state.service = service

    reaper = ExpiredRecordReaper(
        store=durable,
        interval_seconds=config.reaper_interval_seconds,
        logger=logger,
    )
    reaper.start()

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down shortlink service...")
        try:
            await reaper.stop()
        finally:
            await service.close()
        logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("shortlink service")
    logger.info(f"Configuration: {config.model_dump(exclude={'postgres_url', 'redis_url'})}")

    app = create_app(
        service_instance=None,  # Will be set in lifespan
        config=config,
        logger=logger,
    )
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
