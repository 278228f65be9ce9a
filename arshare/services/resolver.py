import enum
import logging
from dataclasses import dataclass
from ..errors import NotFound, LoadFailure

log = logging.getLogger(__name__)


class ShareStatus(str, enum.Enum):
    PENDING = 'Pending'
    APPROVED = 'Approved'
    NEEDS_REVISION = 'Needs Revision'

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError:
            return cls.PENDING


@dataclass(frozen=True)
class ProjectShare:
    share_link_id: str
    product_name: str = ''
    asset_ref_glb: str | None = None
    asset_ref_usdz: str | None = None
    access_code: str | None = None
    status: ShareStatus = ShareStatus.PENDING
    thumbnail_url: str | None = None
    notes: str | None = None

    @property
    def is_protected(self) -> bool:
        return bool(self.access_code)

    @classmethod
    def from_row(cls, row):
        return cls(
            share_link_id=row.share_link_id,
            product_name=row.product_name or '',
            asset_ref_glb=row.glb_url or None,
            asset_ref_usdz=row.usdz_url or None,
            access_code=row.access_code or None,
            status=ShareStatus.parse(row.status),
            thumbnail_url=row.thumbnail_url,
            notes=row.notes,
        )


class SqlShareStore:
    """Reads shares from the ``ar_projects`` table."""

    def get(self, share_link_id: str):
        from ..models import ArProject
        row = ArProject.query.filter_by(share_link_id=share_link_id).first()
        return ProjectShare.from_row(row) if row else None


class ShareResolver:
    def __init__(self, store):
        self.store = store

    def resolve(self, share_link_id: str | None) -> ProjectShare:
        if not share_link_id:
            raise NotFound('no project id provided')
        try:
            record = self.store.get(share_link_id)
        except Exception as e:
            log.error("share lookup failed for %s: %s", share_link_id, e)
            raise LoadFailure(share_link_id, e) from e
        if record is None:
            raise NotFound(share_link_id)
        return record
