#!/usr/bin/env python3
import sys, pathlib

# Usage: python scripts/check_token.py <TOKEN|URL> [EXPECTED_CODE]
# Decodes a bypass token (or the access= param of a preview URL)

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from urllib.parse import urlparse, parse_qs
from arshare.errors import DecodeError
from arshare.services import bypass

def err(msg):
    print(f"ERROR: {msg}")
    sys.exit(1)

if len(sys.argv) < 2:
    err("Usage: check_token.py <TOKEN|URL> [EXPECTED_CODE]")

raw = sys.argv[1].strip()
share_link_id = None
if raw.startswith(('http://', 'https://')):
    qs = parse_qs(urlparse(raw).query)
    share_link_id = (qs.get('id') or [None])[0]
    if 'access' not in qs:
        err("URL carries no access= token")
    raw = qs['access'][0]

try:
    code = bypass.decode(raw)
except DecodeError as e:
    err(str(e))

result = {'share_link_id': share_link_id, 'token': raw, 'code': code}
if len(sys.argv) >= 3:
    result['matches'] = code == sys.argv[2].strip()
print(result)
