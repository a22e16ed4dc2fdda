from .fingerprint import fingerprint_bytes, fingerprint_file

__all__ = [
    "fingerprint_bytes",
    "fingerprint_file",
]
