"""Chain and token constants for CHNC on Celo mainnet."""

CHANCHIS_TOKEN_ADDRESS = "0xd85E17185cC11A02c7a8C5055FE7Cb6278Df9418"
CELO_CHAIN_ID = 42220
CELO_RPC_URL = "https://forno.celo.org"

TOKEN_SYMBOL = "CHNC"
TOKEN_DECIMALS = 18

# EIP-712 domain the token contract was deployed with
PERMIT_DOMAIN_NAME = "Chanchis"
PERMIT_DOMAIN_VERSION = "1"

# Human-readable signatures, as accepted by the relayer API
PERMIT_METHOD = (
    "function permit(address owner, address spender, uint256 value, uint256 deadline, uint8 v, bytes32 r, bytes32 s)"
)
TRANSFER_FROM_METHOD = "function transferFrom(address from, address to, uint256 amount) returns (bool)"

ERC20_PERMIT_READ_ABI = [
    {
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "nonces",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

UINT256_MAX = 2**256 - 1
