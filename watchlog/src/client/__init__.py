from client.notices import Notice, NoticeBoard
from client.operations import Operation, OperationStatus
from client.orchestrator import RandomEpisode, SearchOrchestrator
from client.proxy_client import ProxyClient

__all__ = [
    "Notice",
    "NoticeBoard",
    "Operation",
    "OperationStatus",
    "ProxyClient",
    "RandomEpisode",
    "SearchOrchestrator",
]
