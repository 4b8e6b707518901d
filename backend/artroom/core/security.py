"""
Request signing for the Moxtra unique-ID grant.
"""
import base64
import hashlib
import hmac
import time
import uuid


def generate_nonce() -> str:
    """
    Generate a fresh random nonce for a signed request.
    
    Returns:
        UUID4 string, also sent to Moxtra as the ``uniqueid`` parameter
    """
    return str(uuid.uuid4())


def current_timestamp_ms() -> str:
    """Unix time in milliseconds, as a decimal string."""
    return str(int(time.time() * 1000))


def sign_request(client_id: str, nonce: str, timestamp: str, secret: str) -> str:
    """
    Sign an authentication request.
    
    The message is ``client_id + nonce + timestamp``, signed with
    HMAC-SHA256 keyed by the client secret.
    
    Args:
        client_id: Moxtra client identifier
        nonce: Value from generate_nonce()
        timestamp: Value from current_timestamp_ms()
        secret: Shared client secret
        
    Returns:
        URL-safe base64 signature with padding stripped
    """
    message = f"{client_id}{nonce}{timestamp}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def verify_signature(
    signature: str,
    client_id: str,
    nonce: str,
    timestamp: str,
    secret: str,
) -> bool:
    """
    Check a signature produced by sign_request.
    
    Returns:
        True if the signature matches, False otherwise
    """
    expected = sign_request(client_id, nonce, timestamp, secret)
    return hmac.compare_digest(expected, signature)
