from flask import Blueprint, render_template, request, redirect, url_for, send_file, current_app
import io
from .errors import NotFound, InvalidAccessCode, InvalidFeedback, MissingAsset, RateExceeded
from .services.feedback import FEEDBACK_TYPES, submit_feedback
from .services.gate import AccessGate
from .services.launch import build_launch, DESKTOP_FALLBACK
from .services.qr import build_target_url, render_qr_png
from .services.context import (
    share_resolver, grant_store, stored_grant, visitor_platform, base_url, limit_unlock_attempts,
)

bp = Blueprint('public', __name__)

@bp.get('/')
def home():
    return render_template('page_public.html')

def _not_found(e):
    # LoadFailure is a NotFound: same page either way
    return render_template('not_found.html', message='The requested AR experience could not be found.'), 404

def _viewer(share, access=None, feedback_sent=False, feedback_error=None):
    platform = visitor_platform()
    try:
        launch = build_launch(share, platform)
        missing = None
    except MissingAsset as e:
        launch, missing = None, e.kind
    show_qr = launch is None or launch.kind == DESKTOP_FALLBACK
    return render_template('preview.html', share=share, platform=platform, launch=launch,
                           missing=missing, show_qr=show_qr, access=access,
                           feedback_types=FEEDBACK_TYPES, feedback_sent=feedback_sent,
                           feedback_error=feedback_error)

@bp.get('/ar-client-preview')
def preview():
    share_link_id = request.args.get('id', '')
    access = request.args.get('access')
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver(), access)
    except NotFound as e:
        return _not_found(e)
    if not gate.unlocked:
        return render_template('access.html', gate=gate, share=gate.record)
    return _viewer(gate.record, access=access)

@bp.post('/ar-client-preview')
def submit_code():
    share_link_id = request.args.get('id') or request.form.get('id', '')
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver())
    except NotFound as e:
        return _not_found(e)
    if gate.unlocked:
        return redirect(url_for('public.preview', id=share_link_id), code=303)
    try:
        limit_unlock_attempts()
    except RateExceeded:
        gate.error = 'Too many attempts. Please wait a minute and try again.'
        return render_template('access.html', gate=gate, share=gate.record), 429
    try:
        gate.submit(request.form.get('access_code', ''))
    except InvalidAccessCode:
        return render_template('access.html', gate=gate, share=gate.record)
    return redirect(url_for('public.preview', id=share_link_id), code=303)

@bp.post('/ar-client-preview/feedback')
def feedback():
    share_link_id = request.args.get('id', '')
    # Visitors unlocked by a bypass link hold no grant, so the token rides along
    access = request.args.get('access') or request.form.get('access') or None
    gate = AccessGate(share_link_id, grant_store())
    try:
        gate.open(share_resolver(), access)
    except NotFound as e:
        return _not_found(e)
    if not gate.unlocked:
        return render_template('access.html', gate=gate, share=gate.record), 403
    try:
        submit_feedback(gate.record, request.form.get('feedback_type'), request.form.get('comment'))
    except InvalidFeedback as e:
        return _viewer(gate.record, access=access, feedback_error=str(e)), 400
    return _viewer(gate.record, access=access, feedback_sent=True)

@bp.get('/ar-client-preview/qr.png')
def preview_qr():
    share_link_id = request.args.get('id', '')
    try:
        share = share_resolver().resolve(share_link_id)
    except NotFound as e:
        return _not_found(e)
    url = build_target_url(base_url(), share.share_link_id, stored_grant(grant_store(), share.share_link_id),
                           path=current_app.config['PREVIEW_PATH'])
    return send_file(io.BytesIO(render_qr_png(url)), mimetype='image/png', download_name=f"qr_{share.share_link_id}.png")
