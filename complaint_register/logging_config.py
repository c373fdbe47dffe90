"""
JSON structured logging configuration using python-json-logger
"""
import logging
import logging.config
import sys
from typing import Dict, Any, Optional

import pythonjsonlogger.jsonlogger

from complaint_register.config import Settings, get_settings

logger = logging.getLogger("complaint_register")


class CustomJsonFormatter(pythonjsonlogger.jsonlogger.JsonFormatter):
    """Custom JSON formatter with additional fields"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['service'] = 'complaint-register'

        # Add request ID if available
        if hasattr(record, 'request_id'):
            log_record['request_id'] = record.request_id

        # Add complaint serial if available
        if hasattr(record, 'serial'):
            log_record['serial'] = record.serial


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup JSON structured logging"""
    settings = settings or get_settings()

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {
                '()': CustomJsonFormatter,
                'format': '%(asctime)s %(name)s %(levelname)s %(message)s'
            },
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': settings.LOG_LEVEL,
                'formatter': 'json' if settings.ENVIRONMENT == 'production' else 'standard',
                'stream': sys.stdout
            }
        },
        'loggers': {
            'complaint_register': {
                'level': settings.LOG_LEVEL,
                'handlers': ['console'],
                'propagate': False
            },
            'uvicorn': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            },
            'uvicorn.access': {
                'level': 'INFO',
                'handlers': ['console'],
                'propagate': False
            }
        },
        'root': {
            'level': settings.LOG_LEVEL,
            'handlers': ['console']
        }
    }

    logging.config.dictConfig(config)

    logger.info(
        "Logging configured",
        extra={
            'log_level': settings.LOG_LEVEL,
            'environment': settings.ENVIRONMENT
        }
    )
