import logging
import logging.config
import re

SECRET_PATTERNS = [
    re.compile(r"(?i)((?:shared_)?secret\s*[=:]\s*)([^,\s]+)"),
    re.compile(r"(?i)(authorization\s*[=:]\s*(?:bearer|basic)\s+)([^,\s]+)"),
]


class SecretSafeFilter(logging.Filter):
    def __init__(self, name: str = "", secrets: list[str] | None = None) -> None:
        super().__init__(name)
        self.secrets = [s for s in (secrets or []) if s]

    def _sanitize(self, value: object) -> object:
        if not isinstance(value, str):
            return value

        redacted = value
        for pattern in SECRET_PATTERNS:
            redacted = pattern.sub(r"\1[REDACTED]", redacted)
        for secret in self.secrets:
            redacted = redacted.replace(secret, "[REDACTED]")
        return redacted

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self._sanitize(record.msg)

        if isinstance(record.args, tuple):
            record.args = tuple(self._sanitize(item) for item in record.args)
        elif isinstance(record.args, dict):
            record.args = {key: self._sanitize(value) for key, value in record.args.items()}

        return True


def setup_logging(level: str | None = None) -> None:
    """Configure console logging with secret redaction.

    *level* overrides ``LOG_LEVEL``; the configured shared secret, if any, is
    redacted verbatim from every record.
    """
    from rqpush.core.settings import get_settings

    settings = get_settings()
    level = (level or settings.log_level).upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "secret_safe": {
                    "()": "rqpush.core.logging.SecretSafeFilter",
                    "secrets": [settings.shared_secret] if settings.shared_secret else [],
                }
            },
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["secret_safe"],
                }
            },
            "loggers": {
                "": {
                    "handlers": ["console"],
                    "level": level,
                },
                "httpx": {
                    "handlers": ["console"],
                    "level": "WARNING",
                    "propagate": False,
                },
                "httpcore": {
                    "handlers": ["console"],
                    "level": "WARNING",
                    "propagate": False,
                },
            },
        }
    )
