import os
import sys
import base64
import requests

BASE_URL = os.environ.get('BASE_URL', 'http://localhost:5000')
ADMIN_API_KEY = os.environ.get('ADMIN_API_KEY')

if not ADMIN_API_KEY:
    print('Missing ADMIN_API_KEY in env')
    sys.exit(1)

if len(sys.argv) < 2:
    print('Usage: issue_qr.py <SHARE_LINK_ID>')
    sys.exit(1)

share_link_id = sys.argv[1].strip()
payload = {'include_access': os.environ.get('INCLUDE_ACCESS', '1') == '1'}
headers = {'X-Admin-Key': ADMIN_API_KEY}
url = f"{BASE_URL.rstrip('/')}/admin/shares/{share_link_id}/qr"
out = os.environ.get('OUT', f'qr_{share_link_id}.png')

# If WANT_PNG=1, request image directly
if os.environ.get('WANT_PNG', '0') == '1':
    r = requests.post(url, headers={**headers, 'Accept': 'image/png'}, json=payload, timeout=30)
    if r.status_code != 200:
        print('Error:', r.status_code, r.text)
        sys.exit(1)
    with open(out, 'wb') as f:
        f.write(r.content)
    print('PNG saved to', out)
    sys.exit(0)

# Default: JSON mode
r = requests.post(url, headers=headers, json=payload, timeout=30)
if r.status_code != 200:
    print('Error:', r.status_code, r.text)
    sys.exit(1)
res = r.json()
print('target_url:', res['target_url'])
with open(out, 'wb') as f:
    f.write(base64.b64decode(res['qr_png_b64']))
print('PNG saved to', out)
