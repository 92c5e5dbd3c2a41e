from .client import ContractCall, ContractWriteResult, ThirdwebApiClient
from .errors import ThirdwebApiError

__all__ = ["ContractCall", "ContractWriteResult", "ThirdwebApiClient", "ThirdwebApiError"]
