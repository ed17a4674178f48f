"""
suiwallet - deterministic Ed25519 account keys from a BIP-39 mnemonic.

Key features:
- Streaming PBKDF2 over SHA-1 / SHA-256 / SHA-384 / SHA-512 HMAC
- BIP-39 mnemonic to seed conversion
- Hardened-only SLIP-0010 derivation for Ed25519
- Sui account key pairs at m/44'/784'/{account}'/0'/0'
"""

__version__ = "1.0.0"
__all__ = [
    "errors",
    "pbkdf2",
    "mnemonic",
    "hd",
    "keypair",
    "address",
    "config",
    "logging_config",
]
