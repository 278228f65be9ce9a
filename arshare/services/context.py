"""Per-request wiring: which store, which grant backend, which base URL."""
from flask import current_app, g, request, session
from .device import fingerprint_device
from .grants import SessionGrantStore, DeviceGrantStore, grant_key
from .platform import classify, client_signal
from .rate_limit import r, check_rate_ip
from .resolver import ShareResolver


def share_resolver() -> ShareResolver:
    return ShareResolver(current_app.extensions['share_store'])


def grant_store():
    if current_app.config.get('GRANT_BACKEND') == 'device':
        did, cookie = fingerprint_device(request)
        if cookie:
            g.device_cookie = cookie
        return DeviceGrantStore(r(), did)
    return SessionGrantStore(session)


def stored_grant(grants, share_link_id):
    return grants.get(grant_key(share_link_id))


def visitor_platform():
    return classify(client_signal(request))


def base_url() -> str:
    return (current_app.config.get('BASE_URL') or request.url_root).rstrip('/')


def limit_unlock_attempts():
    check_rate_ip(
        request.remote_addr or '0.0.0.0',
        limit=current_app.config['ACCESS_RATE_LIMIT'],
        window=current_app.config['ACCESS_RATE_WINDOW'],
    )
