"""
Outbound HTTP clients.

Each subpackage wraps one external service behind a small async ``httpx``
client with typed errors:

- thirdweb: sponsor relayer that submits contract writes from the sponsor wallet
- etherscan: block explorer API for token transfer history
- storage: Supabase Storage for business cover images
"""
