import os, sys, pathlib
# Ensure project root is on PYTHONPATH when running directly
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from arshare import create_app
from arshare.models import db, ArProject
from arshare.services.qr import build_target_url

app = create_app()
with app.app_context():
    p = ArProject(
        product_name='Demo Chair',
        glb_url='https://modelviewer.dev/shared-assets/models/Astronaut.glb',
        usdz_url='https://modelviewer.dev/shared-assets/models/Astronaut.usdz',
        access_code=os.environ.get('SEED_ACCESS_CODE') or None,
    )
    db.session.add(p)
    db.session.commit()

    base = os.environ.get('BASE_URL', 'http://localhost:5000')
    print('Preview URL:', build_target_url(base, p.share_link_id))
    if p.access_code:
        print('Access code:', p.access_code)
        print('Bypass URL:', build_target_url(base, p.share_link_id, p.access_code))
