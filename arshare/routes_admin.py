from flask import Blueprint, jsonify, request, current_app, send_file
import base64
import io
import logging
import re
import secrets
import string
from sqlalchemy.exc import IntegrityError
from .errors import NotFound
from .models import db, ArProject
from .services.resolver import ShareStatus
from .services.qr import build_target_url, render_qr_png
from .services.context import share_resolver, base_url

bp = Blueprint('admin', __name__)
log = logging.getLogger(__name__)

ACCESS_CODE_RE = re.compile(r'^[A-Za-z0-9]{1,8}$')
SHARE_ID_RE = re.compile(r'^[A-Za-z0-9_-]{3,64}$')
ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits

def _gen_access_code(length=6):
    return ''.join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))

def _unauthorized():
    # Simple API-key auth
    api_key = request.headers.get('X-Admin-Key') or request.args.get('key')
    if not api_key or api_key != (current_app.config.get('ADMIN_API_KEY') or ''):
        log.warning("rejected admin call to %s from %s", request.path, request.remote_addr)
        return jsonify({'error': 'unauthorized'}), 401
    return None

@bp.get('/ping')
def ping():
    return jsonify({'admin': 'ok'})

@bp.post('/shares')
def create_share():
    denied = _unauthorized()
    if denied:
        return denied

    data = request.get_json(silent=True) or {}
    product_name = (data.get('product_name') or '').strip()
    if not product_name:
        return jsonify({'error': 'missing_product_name'}), 400
    if data.get('public'):
        access_code = None
    else:
        # Shares are protected unless the producer opts out
        access_code = (data.get('access_code') or '').strip() or _gen_access_code()
    if access_code and not ACCESS_CODE_RE.match(access_code):
        return jsonify({'error': 'invalid_access_code', 'detail': 'up to 8 letters or digits'}), 400
    status = data.get('status') or ShareStatus.PENDING.value
    if status not in [s.value for s in ShareStatus]:
        return jsonify({'error': 'invalid_status'}), 400
    share_link_id = data.get('share_link_id')
    if share_link_id is not None and not SHARE_ID_RE.match(share_link_id):
        return jsonify({'error': 'invalid_share_link_id'}), 400

    project = ArProject(
        product_name=product_name,
        glb_url=data.get('glb_url'),
        usdz_url=data.get('usdz_url'),
        thumbnail_url=data.get('thumbnail_url'),
        notes=data.get('notes'),
        access_code=access_code,
        status=status,
    )
    if share_link_id:
        project.share_link_id = share_link_id
    db.session.add(project)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'error': 'duplicate_share_link_id'}), 409

    log.info("created share %s (protected=%s)", project.share_link_id, bool(access_code))
    return jsonify({
        'ok': True,
        'share_link_id': project.share_link_id,
        'access_code': project.access_code,
        'status': project.status,
        'preview_url': build_target_url(base_url(), project.share_link_id, path=current_app.config['PREVIEW_PATH']),
    }), 201

@bp.post('/shares/<share_link_id>/qr')
def issue_qr(share_link_id: str):
    denied = _unauthorized()
    if denied:
        return denied

    try:
        share = share_resolver().resolve(share_link_id)
    except NotFound:
        return jsonify({'error': 'not_found'}), 404

    data = request.get_json(silent=True) or {}
    include_access = data.get('include_access', True)
    # The producer already knows the code, so the link can carry it
    grant = share.access_code if include_access else None
    target_url = build_target_url(base_url(), share.share_link_id, grant, path=current_app.config['PREVIEW_PATH'])
    png = render_qr_png(target_url)

    accept = request.headers.get('Accept', '')
    if 'image/png' in accept:
        return send_file(
            io.BytesIO(png), mimetype='image/png', as_attachment=False, download_name=f"qr_{share.share_link_id}.png",
            etag=False,
        )
    return jsonify({
        'ok': True,
        'share_link_id': share.share_link_id,
        'target_url': target_url,
        'qr_png_b64': base64.b64encode(png).decode('ascii'),
    })
