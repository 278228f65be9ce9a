from flask import Blueprint, request, jsonify, current_app
import base64
from .errors import NotFound, InvalidAccessCode, InvalidFeedback, MissingAsset, RateExceeded
from .services.feedback import submit_feedback
from .services.gate import AccessGate
from .services.launch import build_launch
from .services.qr import build_target_url, render_qr_png
from .services.context import (
    share_resolver, grant_store, stored_grant, visitor_platform, base_url, limit_unlock_attempts,
)

bp = Blueprint('api', __name__)

def _share_json(gate):
    share = gate.record
    body = {
        'state': gate.state.value,
        'share_link_id': share.share_link_id,
        'product_name': share.product_name,
        'protected': share.is_protected,
    }
    if gate.unlocked:
        platform = visitor_platform()
        body['platform'] = {'platform': platform.platform, 'device_class': platform.device_class}
        try:
            body['launch'] = build_launch(share, platform).to_dict()
        except MissingAsset as e:
            body['launch'] = {'error': 'missing_asset', 'asset': e.kind}
    return body

@bp.get('/shares/<share_link_id>')
def share(share_link_id: str):
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver(), request.args.get('access'))
    except NotFound:
        return jsonify({'error': 'not_found'}), 404
    return jsonify(_share_json(gate))

@bp.post('/shares/<share_link_id>/unlock')
def unlock(share_link_id: str):
    data = request.get_json(silent=True) or {}
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver())
    except NotFound:
        return jsonify({'error': 'not_found'}), 404
    if gate.unlocked:
        return jsonify(_share_json(gate))
    try:
        limit_unlock_attempts()
    except RateExceeded:
        return jsonify({'error': 'rate_limited'}), 429
    try:
        gate.submit(str(data.get('code') or ''))
    except InvalidAccessCode as e:
        return jsonify({'error': 'invalid_access_code', 'message': str(e)}), 403
    return jsonify(_share_json(gate))

@bp.get('/shares/<share_link_id>/qr')
def share_qr(share_link_id: str):
    try:
        share = share_resolver().resolve(share_link_id)
    except NotFound:
        return jsonify({'error': 'not_found'}), 404
    url = build_target_url(base_url(), share.share_link_id, stored_grant(grant_store(), share.share_link_id),
                           path=current_app.config['PREVIEW_PATH'])
    png = render_qr_png(url)
    return jsonify({'target_url': url, 'qr_png_b64': base64.b64encode(png).decode('ascii')})

@bp.post('/shares/<share_link_id>/feedback')
def share_feedback(share_link_id: str):
    data = request.get_json(silent=True) or {}
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver(), request.args.get('access') or data.get('access'))
    except NotFound:
        return jsonify({'error': 'not_found'}), 404
    if not gate.unlocked:
        return jsonify({'error': 'locked'}), 403
    try:
        row = submit_feedback(gate.record, data.get('feedback_type'), data.get('comment'))
    except InvalidFeedback as e:
        return jsonify({'error': 'invalid_feedback', 'detail': str(e)}), 400
    return jsonify({'ok': True, 'id': row.id, 'feedback_type': row.feedback_type}), 201
