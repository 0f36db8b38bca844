import logging
from colorlog import ColoredFormatter
from invoice_api.core.settings import settings

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s:%(reset)s %(message)s"
)
PLAIN_FORMAT = "[%(asctime)s] [%(levelname)-8s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def build_formatter(color: bool) -> logging.Formatter:
    # plain output for log collectors that choke on ANSI escapes
    if not color:
        return logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)
    return ColoredFormatter(
        LOG_FORMAT,
        datefmt=DATE_FORMAT,
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    )

handler = logging.StreamHandler()
handler.setFormatter(build_formatter(settings.LOG_COLOR))

logger = logging.getLogger("invoice_api")
logger.setLevel(settings.LOG_LEVEL)
logger.addHandler(handler)
logger.propagate = False
