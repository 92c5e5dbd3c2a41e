from .client import EtherscanApiClient, TokenTransferDTO
from .errors import EtherscanApiError

__all__ = ["EtherscanApiClient", "EtherscanApiError", "TokenTransferDTO"]
