"""
Course Reservation Service - Main Application
Handles the course catalogue, seat reservations and the reservation lifecycle.

    uvicorn src.service.course_booking.main:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    get_engine,
)
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig


SERVICE_NAME = 'course-reservation'


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Course Reservation] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    Logger.base.info('📊 [Course Reservation] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Course Reservation] Dependency injection wired')

    await create_db_and_tables()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('🗄️ [Course Reservation] Database ready')

    Logger.base.info('✅ [Course Reservation] Startup complete')

    yield

    Logger.base.info('🛑 [Course Reservation] Shutting down...')

    await dispose_engine()
    Logger.base.info('🗄️ [Course Reservation] Database engine disposed')

    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Course Reservation] Shutdown complete')


app = create_app(lifespan=lifespan, service_name=SERVICE_NAME)


@app.get('/')
async def root():
    return {'message': 'Course Reservation Service', 'docs': '/docs'}
