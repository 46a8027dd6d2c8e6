import hashlib
import uuid


# API keys are random UUIDs handed to the user once at registration.
# Only the SHA-256 digest is stored, so lookups hash the presented key
# and match the digest in SQL.
def generate_api_key() -> str:
    return str(uuid.uuid4())


def hash_api_key(api_key: str) -> str:
    """Hex SHA-256 digest of an API key"""
    return hashlib.sha256(api_key.encode("utf-8")).hexdigest()

