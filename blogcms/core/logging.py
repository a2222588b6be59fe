import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("blogcms").setLevel(level.upper())
    # Access logs are already written by uvicorn
    logging.getLogger("httpx").setLevel(logging.WARNING)
