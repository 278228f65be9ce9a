"""Bypass tokens carried in the ``access=`` query parameter.

A token is the URL-safe base64 of the access code with padding stripped.
It is an obfuscation convenience so a QR code or a forwarded link can skip
the access prompt. Anyone holding the link can recover the code: it is not
signed, does not expire and must not be treated as an authentication
boundary.
"""
import base64, binascii
from ..errors import DecodeError

# Links produced with the standard alphabet ('+' often arrives as ' ')
_LEGACY = str.maketrans({'+': '-', '/': '_', ' ': '-'})


def encode(code: str) -> str:
    return base64.urlsafe_b64encode(code.encode('utf-8')).rstrip(b'=').decode('ascii')


def decode(token: str) -> str:
    if not isinstance(token, str) or not token:
        raise DecodeError('empty token')
    raw = token.translate(_LEGACY).rstrip('=')
    raw += '=' * (-len(raw) % 4)
    try:
        data = base64.b64decode(raw, altchars=b'-_', validate=True)
        return data.decode('utf-8', errors='replace')
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f'malformed token: {e}') from e
