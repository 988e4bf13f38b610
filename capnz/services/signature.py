from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import re
from typing import Optional

from capnz.core.contracts import CapSignature

logger = logging.getLogger(__name__)


CERT_DEFAULT_ISSUER = "cap.metservice.com"
CERT_DEFAULT_ISSUER_SHORT = "MetService"
CERT_DEFAULT_SUBJECT = "METEOROLOGICAL SERVICE OF NEW ZEALAND LIMITED"
CERT_DEFAULT_VALID_UNTIL = "2025-10-23"

_CN_RE = re.compile(r"CN=([^,]+)")
_O_RE = re.compile(r"O=([^,]+)")
# ASN.1 UTCTime: YYMMDDhhmmssZ
_UTCTIME_RE = re.compile(r"(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})(\d{2})Z")


FALLBACK_SIGNATURE = CapSignature(
    issuer=CERT_DEFAULT_ISSUER,
    subject=CERT_DEFAULT_SUBJECT,
    validUntil=CERT_DEFAULT_VALID_UNTIL,
    fingerprint="Unknown",
)


def clean_certificate_text(raw: str) -> str:
    return re.sub(r"\s", "", (raw or "").replace("&#13;", ""))


def fingerprint_sha256(der: bytes) -> str:
    """AA:BB:... uppercase, 32 byte pairs."""
    digest = hashlib.sha256(der).hexdigest().upper()
    return ":".join(digest[i:i + 2] for i in range(0, len(digest), 2))


def _match_issuer(cert_text: str) -> Optional[str]:
    m = _CN_RE.search(cert_text)
    return m.group(1).strip() if m else None


def _match_subject(cert_text: str) -> Optional[str]:
    m = _O_RE.search(cert_text)
    return m.group(1).strip() if m else None


def _match_valid_until(cert_text: str) -> Optional[str]:
    # notBefore comes first in the validity sequence; the second stamp is notAfter
    stamps = _UTCTIME_RE.findall(cert_text)
    if len(stamps) < 2:
        return None
    yy, mm, dd = stamps[1][0], stamps[1][1], stamps[1][2]
    return f"20{yy}-{mm}-{dd}"


def _decode_certificate(raw: str) -> bytes:
    clean = clean_certificate_text(raw)
    # feeds sometimes drop the trailing "=" padding
    clean += "=" * (-len(clean) % 4)
    try:
        der = base64.b64decode(clean, validate=True)
    except binascii.Error as e:
        raise ValueError(f"certificate is not valid base64: {e}") from e
    if not der:
        raise ValueError("certificate is empty")
    return der


def extract_signature(raw_certificate: str) -> CapSignature:
    """
    Display metadata for the X509Certificate embedded in a CAP <Signature>.

    Best effort: each field falls back independently when its pattern is
    missing, and a certificate that cannot be decoded at all yields
    FALLBACK_SIGNATURE. Nothing here is a trust decision.
    """
    try:
        der = _decode_certificate(raw_certificate)
        # Byte-for-byte view so the ASCII runs inside DER stay searchable
        cert_text = der.decode("latin-1")

        issuer = _match_issuer(cert_text)
        subject = _match_subject(cert_text)
        valid_until = _match_valid_until(cert_text)

        return CapSignature(
            issuer=issuer if issuer else CERT_DEFAULT_ISSUER_SHORT,
            subject=subject if subject else CERT_DEFAULT_SUBJECT,
            validUntil=valid_until if valid_until else CERT_DEFAULT_VALID_UNTIL,
            fingerprint=fingerprint_sha256(der),
        )
    except Exception as e:
        logger.warning("capnz_certificate_parse_failed err=%s", e)
        return FALLBACK_SIGNATURE
