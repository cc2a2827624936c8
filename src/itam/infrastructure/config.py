"""Runtime settings, read from the environment.

    ITAM_DATA_DIR          directory for the JSON stores (default: ./data)
    ITAM_STORE             "json" or "memory" (default: json)
    ITAM_MAX_CAS_ATTEMPTS  compare-and-swap attempts for seats/groups (default: 3)
    ITAM_LOG_LEVEL         root log level for the CLI (default: WARNING)
    ITAM_AUDIT_LOG         JSON-lines audit file; empty disables it
                           (default: <data dir>/audit.jsonl)
"""

from __future__ import annotations

import logging.config
import os
from dataclasses import dataclass
from pathlib import Path

from itam.domain.exceptions import ValidationError

STORE_BACKENDS = ("json", "memory")


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store: str = "json"
    max_cas_attempts: int = 3
    log_level: str = "WARNING"
    audit_log: Path | None = None

    @staticmethod
    def from_env(environ=None) -> Settings:
        env = os.environ if environ is None else environ
        data_dir = Path(env.get("ITAM_DATA_DIR", "data"))

        store = env.get("ITAM_STORE", "json").lower()
        if store not in STORE_BACKENDS:
            raise ValidationError(
                f"ITAM_STORE must be one of {', '.join(STORE_BACKENDS)}, got {store!r}"
            )

        raw_attempts = env.get("ITAM_MAX_CAS_ATTEMPTS", "3")
        try:
            attempts = int(raw_attempts)
        except ValueError:
            raise ValidationError(
                f"ITAM_MAX_CAS_ATTEMPTS must be an integer, got {raw_attempts!r}"
            ) from None
        if attempts < 1:
            raise ValidationError("ITAM_MAX_CAS_ATTEMPTS must be at least 1")

        audit_raw = env.get("ITAM_AUDIT_LOG")
        if audit_raw is None:
            audit_log = data_dir / "audit.jsonl"
        else:
            audit_log = Path(audit_raw) if audit_raw else None

        return Settings(
            data_dir=data_dir,
            store=store,
            max_cas_attempts=attempts,
            log_level=env.get("ITAM_LOG_LEVEL", "WARNING").upper(),
            audit_log=audit_log,
        )


def logging_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    }


def configure_logging(settings: Settings) -> None:
    logging.config.dictConfig(logging_config(settings.log_level))
