"""
Logging setup for the API process.

Handlers are installed once on the root logger; modules only ever call
``logging.getLogger(__name__)``.
"""
import logging
import re
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Mask credentials that end up in log messages."""

    SENSITIVE_PATTERNS = [
        (r'api[_-]?key["\']?\s*[:=]\s*["\']?([^"\'\s&]+)', r'api_key=***'),
        (r'key=([A-Za-z0-9_\-]{20,})', r'key=***'),
        (r'Bearer\s+([^\s"]+)', r'Bearer ***'),
        (r'mongodb(\+srv)?://[^@\s]+@', r'mongodb\1://***@'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._mask(record.msg)
        if record.args and isinstance(record.args, tuple):
            record.args = tuple(
                self._mask(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True

    def _mask(self, text: str) -> str:
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            text = re.sub(pattern, replacement, text, flags=re.IGNORECASE)
        return text


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in root.handlers:
        if getattr(handler, "_mindwatch", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SensitiveDataFilter())
    handler._mindwatch = True
    root.addHandler(handler)
