"""
Chain - On-chain interaction layer for lendpair.

Provides the JSON-RPC client, embedded ABIs, the nonce counter and
transaction planning / submission.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
