import logging
import re
import sys
from ideacoach.utils.config import config

# Matches the provider API key wherever a request URL ends up in a log message
API_KEY_PARAM = re.compile(r"([?&]key=)[^&\s'\"]+")


class RedactApiKeyFilter(logging.Filter):
    """Mask `key=...` query parameters in formatted log messages."""

    def filter(self, record):
        message = record.getMessage()
        redacted = API_KEY_PARAM.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


# Root logger stays at ERROR so library chatter (httpx request lines included) is suppressed
logging.basicConfig(level=logging.ERROR, format=config.log_format, stream=sys.stdout)

# The ideacoach logger gets its own handler at the configured level
ideacoach_logger = logging.getLogger('ideacoach')
ideacoach_logger.setLevel(config.log_level)

ideacoach_handler = logging.StreamHandler(sys.stdout)
ideacoach_handler.setFormatter(logging.Formatter(config.log_format))
ideacoach_handler.addFilter(RedactApiKeyFilter())

# Re-importing must not stack handlers
for handler in list(ideacoach_logger.handlers):
    ideacoach_logger.removeHandler(handler)
ideacoach_logger.addHandler(ideacoach_handler)
ideacoach_logger.propagate = False

logger = logging.getLogger(__name__)
