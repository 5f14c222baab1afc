"""Central error types used by the Train Logger collaborators."""


class TrainLoggerError(RuntimeError):
    """Base error for Train Logger failures outside the tracking core."""


class RecordStoreError(TrainLoggerError):
    """Raised when log records cannot be written to durable storage."""


class FixFormatError(TrainLoggerError):
    """Raised when a recorded fix file lacks required columns."""


__all__ = [
    "TrainLoggerError",
    "RecordStoreError",
    "FixFormatError",
]
