"""
Tracking Controller for Train Logger

This module wires the tracking core to its collaborators. The controller owns
one session, the service that mutates it and the record store, and exposes
start/stop, per-fix processing, session reset, export and read-only views for
the display layer.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
from . import constants
from . import decimation
from . import export
from .config import DEFAULT_CONFIG, TrackingConfig
from .errors import RecordStoreError
from .models import LogRecord, RawFix
from .session import TrackingSession
from .storage import RecordStore
from .tracking import TrackingService

logger = logging.getLogger(__name__)


class TrackingController:
    """
    Central controller for one tracking run.

    On construction, previously stored records are loaded and the session
    counters resume from the last one.

    Args:
        store: Record store used for persistence.
        config: Pipeline configuration.
    """

    def __init__(self, store: RecordStore, config: TrackingConfig = DEFAULT_CONFIG):
        self.store = store
        self.session = TrackingSession(config)
        self.service = TrackingService(self.session)
        self.current_lat_lon: Optional[Tuple[float, float]] = None

        self._records: List[LogRecord] = store.get_all()
        self.session.restore_from_records(self._records)

    @property
    def records(self) -> Tuple[LogRecord, ...]:
        return tuple(self._records)

    @property
    def is_tracking(self) -> bool:
        return self.session.is_tracking

    @property
    def telemetry(self) -> Dict:
        payload = self.session.telemetry()
        payload["record_count"] = len(self._records)
        payload["current_lat_lon"] = list(self.current_lat_lon) if self.current_lat_lon else None
        return payload

    @property
    def polyline(self) -> List[Tuple[float, float]]:
        return list(self.session.polyline_points)

    def track_geojson(self) -> Dict:
        return decimation.polyline_to_geojson(self.session.polyline_points)

    def start(self) -> None:
        if not self.session.is_tracking:
            logger.info("Tracking started")
        self.session.is_tracking = True

    def stop(self) -> None:
        """Stop accepting fixes. Session state is kept so a later start resumes."""
        if self.session.is_tracking:
            logger.info("Tracking stopped at %.1f m", self.session.total_distance_m)
        self.session.is_tracking = False

    def on_fix(self, raw: RawFix) -> List[LogRecord]:
        """
        Process one fix from the location source.

        Fixes arriving while tracking is stopped are ignored. New records are
        kept in memory and persisted; a storage failure is logged and never
        interrupts tracking.

        Args:
            raw: Fix from the location source.

        Returns:
            Records emitted by this fix.
        """
        if not self.session.is_tracking:
            logger.debug("Ignoring fix while tracking is stopped")
            return []

        new_records = self.service.process(raw)
        # Unusable positions never reach the display
        if self.service.last_outcome.reason != "invalid":
            self.current_lat_lon = (raw.latitude, raw.longitude)
        if new_records:
            self._records.extend(new_records)
            try:
                self.store.add_all(new_records)
            except RecordStoreError as exc:
                logger.error("Could not persist %s new records: %s", len(new_records), exc)
        return new_records

    def new_session(self) -> None:
        """Stop tracking, reset the session and wipe stored records."""
        self.stop()
        self.session.reset()
        self._records.clear()
        self.current_lat_lon = None
        try:
            self.store.clear_all()
        except RecordStoreError as exc:
            logger.error("Could not clear stored records: %s", exc)
        logger.info("New session")

    def export_csv(self, directory: Union[str, Path] = constants.EXPORT_DIR) -> Optional[Path]:
        """
        Write all records to a timestamped CSV in ``directory``.

        Returns:
            Path of the CSV, or None when there are no records.
        """
        path = export.export_csv(self._records, directory)
        if path is not None:
            logger.info("Exported %s records to %s", len(self._records), path)
        return path
