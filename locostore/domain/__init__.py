"""Domain package exports for value objects, settings and errors."""

from .catalogue import DEFAULT_DOMAIN, MessageCatalogue
from .errors import RemoteErrorKind, StorageError
from .message import Message
from .project import INDEX_BY_ID, INDEX_BY_TEXT, LocoProject
from .remote_models import ImportResult, RemoteAsset, RemoteTranslation
from .settings import DEFAULT_BASE_URL, LocoSettings

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_DOMAIN",
    "INDEX_BY_ID",
    "INDEX_BY_TEXT",
    "ImportResult",
    "LocoProject",
    "LocoSettings",
    "Message",
    "MessageCatalogue",
    "RemoteAsset",
    "RemoteErrorKind",
    "RemoteTranslation",
    "StorageError",
]
