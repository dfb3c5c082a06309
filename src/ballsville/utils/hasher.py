import hashlib


class Hasher:
    """
    Hasher provides static methods for generating content hashes.

    Methods
    -------
    hash_string(input_string: str) -> str
        Returns a SHA256 hash of the input string.
    hash_bytes(input_bytes: bytes) -> str
        Returns a SHA256 hash of the input bytes.
    md5_bytes(input_bytes: bytes) -> str
        Returns an MD5 hex digest, the shape S3-compatible stores use for etags.
    """

    @staticmethod
    def hash_string(input_string: str) -> str:
        """Returns a SHA256 hash of the input string."""

        return hashlib.sha256(input_string.encode("utf-8")).hexdigest()

    @staticmethod
    def hash_bytes(input_bytes: bytes) -> str:
        """Returns a SHA256 hash of the input bytes."""

        return hashlib.sha256(input_bytes).hexdigest()

    @staticmethod
    def md5_bytes(input_bytes: bytes) -> str:
        """Returns an MD5 hex digest of the input bytes."""

        return hashlib.md5(input_bytes, usedforsecurity=False).hexdigest()
