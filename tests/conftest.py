import pytest

from arshare import create_app
from arshare.models import db, ArProject
from arshare.services import rate_limit
from arshare.services.resolver import ProjectShare

IPHONE_UA = 'Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15 Mobile/15E148'
ANDROID_UA = 'Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 Chrome/124.0 Mobile Safari/537.36'
DESKTOP_UA = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/124.0 Safari/537.36'


class FakeShareStore:
    def __init__(self, *shares, error=None):
        self.shares = {s.share_link_id: s for s in shares}
        self.error = error
        self.reads = 0

    def get(self, share_link_id):
        self.reads += 1
        if self.error:
            raise self.error
        return self.shares.get(share_link_id)


@pytest.fixture(autouse=True)
def fresh_backend():
    rate_limit._set(None)
    yield
    rate_limit._set(None)


@pytest.fixture
def app():
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'USE_REDIS': False,
        'ADMIN_API_KEY': 'test-key',
        'BASE_URL': 'http://testserver',
        'GRANT_BACKEND': 'session',
    })
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def add_share(app):
    def _add(**kwargs):
        kwargs.setdefault('product_name', 'Chair')
        kwargs.setdefault('glb_url', 'https://cdn.example.com/chair.glb')
        with app.app_context():
            row = ArProject(**kwargs)
            db.session.add(row)
            db.session.commit()
            return ProjectShare.from_row(row)
    return _add


@pytest.fixture
def protected_share():
    return ProjectShare(
        share_link_id='ar-ab12cd',
        product_name='Chair',
        asset_ref_glb='https://x/y.glb',
        asset_ref_usdz='https://x/y.usdz',
        access_code='XYZ123',
    )


@pytest.fixture
def public_share():
    return ProjectShare(share_link_id='ar-public', product_name='Lamp', asset_ref_glb='https://x/lamp.glb')
