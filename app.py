"""
FastAPI Web Application for Train Logger

This module provides a REST API over the tracking controller: feeding GPS
fixes, reading live telemetry and the decimated path, listing log records,
managing the session and exporting records as CSV.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional
from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field
import train_logger
from train_logger import constants, export


# ============================================================================
# APPLICATION SETUP
# ============================================================================

load_dotenv()


def _setup_logging() -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.INFO,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        )


_setup_logging()

app = FastAPI(title="Train Logger")


# ============================================================================
# CONTROLLER
# ============================================================================

# Single controller shared by all requests (created on first use)
_controller: Optional[train_logger.TrackingController] = None


def get_controller() -> train_logger.TrackingController:
    """
    Return the process-wide tracking controller.

    The controller is created lazily with the default record store and a
    configuration read from the environment, resuming any stored session.

    Returns:
        The shared TrackingController.
    """
    global _controller
    if _controller is None:
        store = train_logger.RecordStore(constants.DEFAULT_RECORDS_FILE)
        _controller = train_logger.TrackingController(
            store, config=train_logger.TrackingConfig.from_env()
        )
    return _controller


class FixIn(BaseModel):
    """A GPS fix as posted by the location source."""

    latitude: float
    longitude: float
    altitude: Optional[float] = Field(None, description="meters; omitted when the device reports none")
    accuracy: float
    speed: float = Field(-1.0, description="m/s; zero or negative means unavailable")
    timestamp: Optional[datetime] = None

    def to_raw_fix(self) -> train_logger.RawFix:
        return train_logger.RawFix(
            latitude=self.latitude,
            longitude=self.longitude,
            altitude=math.nan if self.altitude is None else self.altitude,
            accuracy=self.accuracy,
            speed=self.speed,
            timestamp=self.timestamp or datetime.now(timezone.utc),
        )


# ============================================================================
# API ROUTES - TRACKING
# ============================================================================

@app.post("/api/tracking/start")
def start_tracking(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Start accepting fixes.

    Returns:
        Live telemetry after the state change.
    """
    controller.start()
    return controller.telemetry


@app.post("/api/tracking/stop")
def stop_tracking(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Stop accepting fixes. Accumulated state is kept for a later resume.

    Returns:
        Live telemetry after the state change.
    """
    controller.stop()
    return controller.telemetry


@app.post("/api/fixes")
def post_fix(fix: FixIn, controller: train_logger.TrackingController = Depends(get_controller)) -> List[dict]:
    """
    Process one GPS fix.

    Args:
        fix: Fix payload.

    Returns:
        List of log records emitted by this fix (often empty).
    """
    records = controller.on_fix(fix.to_raw_fix())
    return [record.to_dict() for record in records]


@app.post("/api/session/new")
def new_session(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Clear all records and reset the session.

    Returns:
        Live telemetry of the fresh session.
    """
    controller.new_session()
    return controller.telemetry


# ============================================================================
# API ROUTES - DATA RETRIEVAL
# ============================================================================

@app.get("/api/telemetry")
def get_telemetry(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Get the live values shown on the dashboard.

    Returns:
        Dictionary with speed, altitude, distance totals, next threshold,
        record count and tracking state.
    """
    return controller.telemetry


@app.get("/api/track")
def get_track(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Get the decimated travelled path as GeoJSON.

    Returns:
        GeoJSON FeatureCollection with the path LineString and start marker.
    """
    return controller.track_geojson()


@app.get("/api/records")
def get_records(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Get all log records of the current session.

    Returns:
        List of log record dictionaries in emission order.
    """
    return [record.to_dict() for record in controller.records]


# ============================================================================
# API ROUTES - EXPORT
# ============================================================================

@app.get("/api/export/csv")
def export_records(controller: train_logger.TrackingController = Depends(get_controller)):
    """
    Export all log records as CSV.

    Returns:
        PlainTextResponse: CSV file with Content-Disposition header
        for download. Filename: train_log_YYYYMMDD_HHMMSS.csv

    Raises:
        HTTPException: If there are no records to export (status 404).
    """
    records = controller.records
    if not records:
        raise HTTPException(status_code=404, detail="No records to export")

    body = train_logger.build_csv(records)
    filename = export.export_filename()
    headers = {"Content-Disposition": f"attachment; filename={filename}"}
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers=headers
    )


# ============================================================================
# RUN INSTRUCTIONS
# ============================================================================
# Run with: uvicorn app:app --reload
