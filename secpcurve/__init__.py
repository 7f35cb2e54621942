"""Field and point arithmetic for the secp256k1 elliptic curve."""

__version__ = "0.1.0"

__all__ = ["limbs", "field", "curve", "batch"]