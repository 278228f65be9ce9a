#!/usr/bin/env python3
import sys, json, redis

# Usage: python scripts/check_redis.py <REDIS_URL> <DEVICE_ID> <SHARE_LINK_ID>
# Shows whether a device holds an access grant for a share (GRANT_BACKEND=device)

if len(sys.argv) < 4:
    print("Usage: check_redis.py <REDIS_URL> <DEVICE_ID> <SHARE_LINK_ID>")
    sys.exit(1)

url = sys.argv[1].strip()
device_id = sys.argv[2].strip()
share_link_id = sys.argv[3].strip()

r = redis.from_url(url, decode_responses=True)

key = f"dev:{device_id}:ar_access_{share_link_id}"
grant = r.get(key)

print(json.dumps({
    'redis': url,
    'grant_key': key,
    'has_grant': grant is not None,
    'grant_len': len(grant) if grant else 0,
}, indent=2))
