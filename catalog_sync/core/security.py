import os
import base64
import hashlib
import hmac
import logging
from typing import Optional
from cryptography.fernet import Fernet
from cryptography.fernet import InvalidToken

logger = logging.getLogger(__name__)

# Store credential encryption
def get_encryption_key() -> bytes:
    key = os.getenv("ENCRYPTION_KEY")
    if not key:
        raise ValueError("ENCRYPTION_KEY environment variable is not set")
    return key.encode()

def get_fernet() -> Fernet:
    key = get_encryption_key()
    try:
        return Fernet(key)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid encryption key: {str(e)}")

def encrypt_token(token: Optional[str]) -> str:
    """
    Encrypt a credential using Fernet symmetric encryption.
    Returns the encrypted value as a base64-encoded string.
    """
    if not token:
        return ""

    f = get_fernet()
    encrypted_bytes = f.encrypt(token.encode())
    return encrypted_bytes.decode()

def decrypt_token(encrypted_token: Optional[str]) -> Optional[str]:
    """
    Decrypt a credential produced by encrypt_token.
    Returns None for empty input or when the value is not a valid token.
    """
    if not encrypted_token:
        return None

    try:
        decrypted_bytes = get_fernet().decrypt(encrypted_token.encode())
        return decrypted_bytes.decode()
    except InvalidToken:
        return None

def compute_shopify_hmac(raw_body: bytes, secret: str) -> str:
    """Base64-encoded HMAC-SHA256 of the raw body, as sent in X-Shopify-Hmac-Sha256."""
    digest = hmac.new(secret.encode("utf-8"), raw_body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("utf-8")

def verify_shopify_hmac(raw_body: bytes, hmac_header: Optional[str], secret: Optional[str]) -> bool:
    """
    Verify the HMAC-SHA256 signature of a Shopify webhook delivery.

    Args:
        raw_body: The raw HTTP request body bytes, exactly as received.
        hmac_header: The value of the X-Shopify-Hmac-Sha256 header.
        secret: The webhook secret of the receiving store.

    Returns:
        True if the signature matches, False when it does not or when the
        header or secret is missing.
    """
    if not secret or not hmac_header:
        logger.warning("Webhook signature check without %s", "secret" if not secret else "HMAC header")
        return False
    computed = compute_shopify_hmac(raw_body, secret)
    return hmac.compare_digest(computed.encode("utf-8"), hmac_header.strip().encode("utf-8"))
