from .client import SupabaseStorageClient
from .errors import StorageApiError

__all__ = ["StorageApiError", "SupabaseStorageClient"]
