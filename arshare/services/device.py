import hashlib, os

DEVICE_COOKIE = 'did'

def fingerprint_device(request) -> tuple[str, tuple|None]:
    """Stable per-browser id, plus the cookie to set when the browser has none yet."""
    ua = request.headers.get('User-Agent','')
    plat = request.headers.get('Sec-CH-UA-Platform','')
    lang = request.headers.get('Accept-Language','')
    entropy = request.cookies.get(DEVICE_COOKIE) or os.urandom(8).hex()
    raw = f"{ua}|{plat}|{lang}|{entropy}"
    did = hashlib.sha256(raw.encode()).hexdigest()[:32]
    resp_cookie = None if request.cookies.get(DEVICE_COOKIE) else (DEVICE_COOKIE, entropy, {'httponly':True, 'samesite':'Lax', 'secure':request.is_secure, 'max_age':31536000})
    return did, resp_cookie
