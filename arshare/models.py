from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import func
import secrets

db = SQLAlchemy()


def _gen_share_link_id():
    """Short opaque slug, e.g. ``ar-3f9c1a``."""
    return f"ar-{secrets.token_hex(3)}"


class ArProject(db.Model):
    __tablename__ = 'ar_projects'
    id = db.Column(db.Integer, primary_key=True)
    share_link_id = db.Column(db.String(64), unique=True, nullable=False, default=_gen_share_link_id)
    product_name = db.Column(db.String(255), nullable=False)
    glb_url = db.Column(db.Text)
    usdz_url = db.Column(db.Text)
    thumbnail_url = db.Column(db.Text)
    notes = db.Column(db.Text)
    status = db.Column(db.String(32), default='Pending')  # Pending|Approved|Needs Revision
    access_code = db.Column(db.String(8))
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class ClientFeedback(db.Model):
    __tablename__ = 'client_feedback'
    id = db.Column(db.Integer, primary_key=True)
    ar_project_id = db.Column(db.String(64), db.ForeignKey('ar_projects.share_link_id'), nullable=False)
    feedback_type = db.Column(db.String(32), nullable=False)  # Approved|Needs Revision
    comment = db.Column(db.Text)
    submitted_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
