from .general import setup_logger, infer_database_type, LoggingMixin

__all__ = ["setup_logger", "infer_database_type", "LoggingMixin"]
