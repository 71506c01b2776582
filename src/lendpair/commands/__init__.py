"""
Commands - CLI command implementations for lendpair.

- deploy: deploy-pair, deploy-rate
- pair:   deposit, withdraw, set-vault
- query:  vault, max-withdraw, position
- encode: offline parameter group encoding
"""
