# docusafe/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

# Ensure logs directory exists
LOG_DIR = settings.LOGS_PATH
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Attributes every LogRecord carries; anything else on a record came from `extra`
RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "component", "context"}


class ContextFormatter(logging.Formatter):
    """Appends the record's context fields as `key=value` pairs"""

    def format(self, record):
        fields = {
            key: value for key, value in vars(record).items()
            if key not in RESERVED_ATTRS
        }
        record.context = " ".join(f"{key}={value}" for key, value in fields.items())
        message = super().format(record)
        return f"{message} | {record.context}" if record.context else message


console_formatter = ContextFormatter(
    '\033[1;36m%(asctime)s\033[0m - \033[1;33m%(component)s\033[0m - \033[1;35m%(levelname)s\033[0m [\033[1;34m%(module)s:%(lineno)d\033[0m] - %(message)s'
)
file_formatter = ContextFormatter(
    '%(asctime)s - %(component)s - %(levelname)s [%(module)s:%(lineno)d] - %(message)s'
)


class DocusafeLogger:
    """Component logger whose bound context is merged into every record's `extra`"""
    def __init__(self, name: str, context: dict | None = None):
        self.name = name
        self.context = dict(context or {})
        self.logger = logging.getLogger(f"docusafe.{name}")
        self.setup_handlers()

    def setup_handlers(self):
        """One rotating file per component plus a colored console stream"""
        if self.logger.handlers:
            return
        self.logger.setLevel(logging.INFO)

        file_handler = RotatingFileHandler(
            LOG_DIR / f"{self.name}.log",
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setFormatter(file_formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        self.logger.addHandler(console_handler)

    def bind(self, **context) -> "DocusafeLogger":
        """Logger for the same component with extra fields attached to each record"""
        return DocusafeLogger(self.name, {**self.context, **context})

    def _merge_extra(self, extra):
        merged = {**self.context, **(extra or {})}
        sanitized = {
            (f"extra_{key}" if key in RESERVED_ATTRS else key): value
            for key, value in merged.items()
        }
        sanitized["component"] = self.name
        return sanitized

    def log(self, level, msg, extra=None, exc_info=None):
        self.logger.log(level, msg, extra=self._merge_extra(extra), exc_info=exc_info, stacklevel=3)

    def debug(self, msg, extra=None, exc_info=None):
        self.log(logging.DEBUG, msg, extra, exc_info)

    def info(self, msg, extra=None, exc_info=None):
        self.log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self.log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self.log(logging.ERROR, msg, extra, exc_info)

    def critical(self, msg, extra=None, exc_info=None):
        self.log(logging.CRITICAL, msg, extra, exc_info)


# Create loggers for different components
api_logger = DocusafeLogger("api")
db_logger = DocusafeLogger("database")
service_logger = DocusafeLogger("service")

__all__ = ["DocusafeLogger", "api_logger", "db_logger", "service_logger"]
