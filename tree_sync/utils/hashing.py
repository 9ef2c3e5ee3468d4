"""Fast content hashing for content-based change stamps.

Uses xxhash for speed when available, falls back to md5.
Designed for change detection where speed matters more than cryptographic security.
"""

import hashlib

try:
    import xxhash
    XXHASH_AVAILABLE = True
except ImportError:
    XXHASH_AVAILABLE = False


def _new_hasher(algorithm: str):
    if algorithm == "auto":
        if XXHASH_AVAILABLE:
            return xxhash.xxh64()
        return hashlib.md5()
    if algorithm == "xxhash":
        if not XXHASH_AVAILABLE:
            raise ImportError("xxhash not installed. Install with: pip install xxhash")
        return xxhash.xxh64()
    if algorithm == "md5":
        return hashlib.md5()
    if algorithm == "sha256":
        return hashlib.sha256()
    raise ValueError(f"Unknown algorithm: {algorithm}")


def hash_bytes(data: bytes, algorithm: str = "auto") -> str:
    """Compute a fast hash of in-memory content.

    Args:
        data: Content to hash
        algorithm: Hash algorithm ("auto", "xxhash", "md5", "sha256")
                   "auto" uses xxhash if available, else md5

    Returns:
        Hex digest of the content hash

    Raises:
        ValueError: If the algorithm is unknown
        ImportError: If "xxhash" is requested but not installed
    """
    hasher = _new_hasher(algorithm)
    hasher.update(data)
    return hasher.hexdigest()
