"""Certificate display metadata from a CAP <Signature> block."""

import re

from capnz.services.signature import (
    CERT_DEFAULT_SUBJECT,
    CERT_DEFAULT_VALID_UNTIL,
    FALLBACK_SIGNATURE,
    clean_certificate_text,
    extract_signature,
    fingerprint_sha256,
)

# base64 of:
#   CN=cap.metservice.com,O=MetService Test Org,C=NZ 240315000000Z270315235959Z
CERT_B64 = (
    "Q049Y2FwLm1ldHNlcnZpY2UuY29tLE89TWV0U2VydmljZSBU"
    "ZXN0IE9yZyxDPU5aIDI0MDMxNTAwMDAwMFoyNzAzMTUyMzU5NTla"
)
CERT_FINGERPRINT = (
    "56:05:A1:0D:30:FD:20:58:DC:70:C2:80:7D:7F:7D:13:"
    "F1:35:A3:35:0A:58:6C:3A:49:6F:8D:3C:5F:78:2E:FC"
)

# base64 of "no subject data here"
PLAIN_B64 = "bm8gc3ViamVjdCBkYXRhIGhlcmU="
PLAIN_FINGERPRINT = (
    "D0:1C:C9:A4:89:96:3D:99:83:0F:3C:B6:06:35:DA:8B:"
    "7D:4A:5B:F6:26:A9:BC:57:B4:C0:CF:0A:26:B4:08:7B"
)


def test_fields_are_extracted():
    sig = extract_signature(CERT_B64)
    assert sig.issuer == "cap.metservice.com"
    assert sig.subject == "MetService Test Org"
    # second UTCTime is notAfter
    assert sig.validUntil == "2027-03-15"
    assert sig.fingerprint == CERT_FINGERPRINT


def test_fingerprint_format_is_32_uppercase_pairs():
    fp = extract_signature(CERT_B64).fingerprint
    pairs = fp.split(":")
    assert len(pairs) == 32
    assert all(re.fullmatch(r"[0-9A-F]{2}", p) for p in pairs)


def test_carriage_return_entities_and_whitespace_are_stripped():
    noisy = CERT_B64[:48] + "&#13;\n    " + CERT_B64[48:] + "\r\n"
    assert clean_certificate_text(noisy) == CERT_B64
    assert extract_signature(noisy) == extract_signature(CERT_B64)


def test_missing_patterns_fall_back_per_field():
    sig = extract_signature(PLAIN_B64)
    assert sig.issuer == "MetService"
    assert sig.subject == CERT_DEFAULT_SUBJECT
    assert sig.validUntil == CERT_DEFAULT_VALID_UNTIL
    # the fingerprint is still real
    assert sig.fingerprint == PLAIN_FINGERPRINT


def test_single_timestamp_is_not_an_expiry():
    import base64

    blob = base64.b64encode(b"CN=x,O=y 240315000000Z").decode("ascii")
    assert extract_signature(blob).validUntil == CERT_DEFAULT_VALID_UNTIL


def test_malformed_base64_yields_fallback_record():
    sig = extract_signature("this is not base64!!")
    assert sig == FALLBACK_SIGNATURE
    assert sig.issuer == "cap.metservice.com"
    assert sig.fingerprint == "Unknown"


def test_empty_certificate_yields_fallback_record():
    assert extract_signature("&#13;\n") == FALLBACK_SIGNATURE


def test_fingerprint_sha256_of_empty_bytes():
    assert fingerprint_sha256(b"").startswith("E3:B0:C4:42:98:FC")


def test_missing_base64_padding_is_tolerated():
    import base64

    blob = base64.b64encode(b"CN=abc,O=def,C=NZ 240315000000Z270315235959Z").decode("ascii")
    assert blob.endswith("=")
    sig = extract_signature(blob.rstrip("="))
    assert sig.issuer == "abc"
    assert sig.subject == "def"
    assert sig.validUntil == "2027-03-15"
    assert sig == extract_signature(blob)
