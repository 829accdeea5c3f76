import logging
from collections import deque
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "success": logging.INFO,
    "info": logging.INFO,
    "error": logging.WARNING,
}


@dataclass(frozen=True)
class Notice:
    level: str  # "success" | "info" | "error"
    message: str


class NoticeBoard:
    """Transient user-facing messages, newest last."""

    def __init__(self, maxlen: int = 50) -> None:
        self._notices: deque[Notice] = deque(maxlen=maxlen)

    def post(self, level: str, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        logger.log(_LOG_LEVELS.get(level, logging.INFO), "notice[%s]: %s", level, message)
        self._notices.append(notice)
        return notice

    def info(self, message: str) -> Notice:
        return self.post("info", message)

    def error(self, message: str) -> Notice:
        return self.post("error", message)

    def drain(self) -> list[Notice]:
        notices = list(self._notices)
        self._notices.clear()
        return notices

    def __iter__(self):
        return iter(list(self._notices))

    def __len__(self) -> int:
        return len(self._notices)
