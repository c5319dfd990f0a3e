import logging
import sys
import structlog


def configure_logging(env: str = "dev", level: int | None = None) -> None:
    """Console output in dev, JSON lines in prod.

    Context bound with structlog.contextvars (the feed listener binds its
    thread name) is merged into every event.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if env == "prod":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    if level is None:
        level = logging.INFO if env == "prod" else logging.DEBUG

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    # urllib3 stays at INFO or above
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))


logger = structlog.get_logger("servicedesk")
