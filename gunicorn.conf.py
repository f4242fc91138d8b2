import multiprocessing
import logging.config

import structlog


cpu_count = multiprocessing.cpu_count()
max_workers = 8
workers = min(cpu_count * 2 + 1, max_workers)

wsgi_app = "config.wsgi:application"

# External DID resolution is bounded by IDENTITY_AGENT_RESOLVE_TIMEOUT, well below this.
timeout = 30
keepalive = 5

graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

loglevel = "info"
errorlog = "-"
accesslog = "-"
access_log_format = (
    '%(h)s "%(r)s" %(s)s %(b)s %(M)sms request_id="%({X-Request-Id}i)s"'
)

worker_class = "sync"
preload_app = True


def gunicorn_event_name_mapper(logger, name, event_dict):
    """
    Give gunicorn lines a stable event name; keep the raw text under "message".
    """
    logger_name = event_dict.get("logger")
    if logger_name not in ("gunicorn.error", "gunicorn.access"):
        return event_dict

    raw_event = event_dict.get("event")
    if not isinstance(raw_event, str):
        return event_dict

    event_dict["message"] = raw_event
    if logger_name == "gunicorn.access":
        event_dict["event"] = "gunicorn.request_handling"
        return event_dict

    lowered = raw_event.lower()
    if lowered.startswith(("starting", "listening", "using", "booting")):
        event_dict["event"] = "gunicorn.booting"
    elif lowered.startswith("handling signal"):
        event_dict["event"] = "gunicorn.signal_handling"
    return event_dict


pre_chain = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    gunicorn_event_name_mapper,
]

logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "root": {"level": "INFO", "handlers": ["default"]},
    "loggers": {
        "gunicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "gunicorn.access": {"level": "INFO", "handlers": ["default"], "propagate": False},
    },
    "handlers": {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "logfmt_formatter",
        },
    },
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": pre_chain,
        }
    },
}

logging.config.dictConfig(logconfig_dict)
