"""QR Code generation: segments, error correction, module layout, rendering and a text menu."""

__version__ = "0.1.0"

__all__ = ["app", "ecc", "matrix", "qrcode", "segment"]