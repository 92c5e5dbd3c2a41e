"""Chanchis.

Backend services for the Chanchis Farcaster mini-app, which manages the CHNC
ERC-20 token on the Celo chain.

Core subpackages
----------------

- ``chanchis.core``:

  - Logging and Logfire monitoring configuration.
  - Token primitives (units, EIP-2612 permit typed data, signature handling,
    read-only contract access).
  - The relational layer for the affiliated business directory.

- ``chanchis.clients``:

  - Thin HTTP clients for the sponsor relayer (thirdweb), the block explorer
    (Etherscan) and object storage (Supabase Storage).

- ``chanchis.server``:

  - The FastAPI application exposing balances, gasless transfers, transfer
    history, business CRUD, cover uploads and the cashback calculator.

Gasless transfer workflow
-------------------------

1. The client asks for the owner's permit nonce and the sponsor (spender).
2. The client signs an EIP-2612 ``Permit`` with its wallet.
3. The server relays ``permit`` and then ``transferFrom`` as the sponsor, so
   the owner never pays gas.
"""
