import base64
import hashlib
import hmac

from catalog_sync.core.security import (
    compute_shopify_hmac,
    decrypt_token,
    encrypt_token,
    get_encryption_key,
    verify_shopify_hmac,
)

# Test data
TEST_TOKEN = "shpat_12345abcde67890fghijk"
TEST_SECRET = "whsec_shared_secret"
TEST_BODY = b'{"id": 5001, "order_number": 1001, "total_price": "99.99"}'


def _sign(body: bytes, secret: str) -> str:
    return base64.b64encode(hmac.new(secret.encode(), body, hashlib.sha256).digest()).decode()


def test_token_encryption():
    """Encrypted credentials decrypt back to the original"""
    encrypted = encrypt_token(TEST_TOKEN)
    assert encrypted != TEST_TOKEN
    assert decrypt_token(encrypted) == TEST_TOKEN


def test_token_encryption_empty_values():
    assert encrypt_token("") == ""
    assert encrypt_token(None) == ""
    assert decrypt_token("") is None


def test_token_decryption_invalid_token():
    assert decrypt_token("invalid_token") is None
    # valid base64, not a Fernet token
    assert decrypt_token("d2VsbCB0aGlzIGlzIG5vdCBhIHZhbGlkIHRva2Vu") is None


def test_encryption_key_environment():
    key = get_encryption_key()
    assert isinstance(key, bytes)
    assert len(key) > 0


def test_compute_shopify_hmac_matches_reference():
    assert compute_shopify_hmac(TEST_BODY, TEST_SECRET) == _sign(TEST_BODY, TEST_SECRET)


def test_verify_shopify_hmac_accepts_valid_signature():
    assert verify_shopify_hmac(TEST_BODY, _sign(TEST_BODY, TEST_SECRET), TEST_SECRET) is True


def test_verify_shopify_hmac_rejects_tampered_body():
    """A single changed byte invalidates the signature"""
    signature = _sign(TEST_BODY, TEST_SECRET)
    tampered = TEST_BODY.replace(b"99.99", b"00.01")
    assert verify_shopify_hmac(tampered, signature, TEST_SECRET) is False


def test_verify_shopify_hmac_rejects_wrong_secret():
    assert verify_shopify_hmac(TEST_BODY, _sign(TEST_BODY, "other"), TEST_SECRET) is False


def test_verify_shopify_hmac_missing_header_or_secret():
    signature = _sign(TEST_BODY, TEST_SECRET)
    assert verify_shopify_hmac(TEST_BODY, None, TEST_SECRET) is False
    assert verify_shopify_hmac(TEST_BODY, "", TEST_SECRET) is False
    assert verify_shopify_hmac(TEST_BODY, signature, "") is False
    assert verify_shopify_hmac(TEST_BODY, signature, None) is False
