import logging
from .resolver import ShareStatus
from ..errors import InvalidFeedback

log = logging.getLogger(__name__)

FEEDBACK_TYPES = (ShareStatus.APPROVED.value, ShareStatus.NEEDS_REVISION.value)
MAX_COMMENT = 2000


def submit_feedback(share, feedback_type, comment=None):
    """Record a visitor's decision on a share. The caller checks the gate first."""
    from ..models import db, ClientFeedback
    if feedback_type not in FEEDBACK_TYPES:
        raise InvalidFeedback('choose Approved or Needs Revision')
    comment = (comment or '').strip() or None
    if comment and len(comment) > MAX_COMMENT:
        raise InvalidFeedback(f'comment longer than {MAX_COMMENT} characters')
    row = ClientFeedback(ar_project_id=share.share_link_id, feedback_type=feedback_type, comment=comment)
    db.session.add(row)
    db.session.commit()
    log.info("feedback %s on share %s", feedback_type, share.share_link_id)
    return row
