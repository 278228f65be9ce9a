import base64

from arshare.services import bypass

ADMIN = {'X-Admin-Key': 'test-key'}


def test_ping(client):
    assert client.get('/admin/ping').get_json() == {'admin': 'ok'}


def test_create_requires_key(client):
    assert client.post('/admin/shares', json={'product_name': 'Chair'}).status_code == 401
    assert client.post('/admin/shares', json={'product_name': 'Chair'}, headers={'X-Admin-Key': 'bad'}).status_code == 401


def test_create_share(client):
    r = client.post('/admin/shares', headers=ADMIN, json={
        'product_name': 'Chair', 'glb_url': 'https://x/y.glb', 'access_code': 'XYZ123',
    })
    assert r.status_code == 201
    body = r.get_json()
    assert body['share_link_id'].startswith('ar-')
    assert body['preview_url'] == f"http://testserver/ar-client-preview?id={body['share_link_id']}"

    page = client.get(f"/ar-client-preview?id={body['share_link_id']}")
    assert b'Access Required' in page.data


def test_create_share_validation(client):
    assert client.post('/admin/shares', headers=ADMIN, json={}).status_code == 400
    for code in ('TOOLONG99', 'AB-12', 'ab cd'):
        r = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair', 'access_code': code})
        assert r.status_code == 400
        assert r.get_json()['error'] == 'invalid_access_code'
    r = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair', 'share_link_id': 'a/b'})
    assert r.status_code == 400


def test_duplicate_share_link_id(client):
    payload = {'product_name': 'Chair', 'share_link_id': 'ar-dup001'}
    assert client.post('/admin/shares', headers=ADMIN, json=payload).status_code == 201
    assert client.post('/admin/shares', headers=ADMIN, json=payload).status_code == 409


def test_issue_qr_embeds_bypass_token(client, add_share):
    add_share(share_link_id='ar-ab12cd', access_code='XYZ123')
    r = client.post('/admin/shares/ar-ab12cd/qr', headers=ADMIN, json={})
    body = r.get_json()
    assert body['target_url'] == 'http://testserver/ar-client-preview?id=ar-ab12cd&access=' + bypass.encode('XYZ123')
    assert base64.b64decode(body['qr_png_b64'])[:4] == b'\x89PNG'

    page = client.get(body['target_url'].replace('http://testserver', ''))
    assert b'Access Required' not in page.data


def test_issue_qr_without_access(client, add_share):
    add_share(share_link_id='ar-ab12cd', access_code='XYZ123')
    body = client.post('/admin/shares/ar-ab12cd/qr', headers=ADMIN, json={'include_access': False}).get_json()
    assert body['target_url'] == 'http://testserver/ar-client-preview?id=ar-ab12cd'


def test_issue_qr_png(client, add_share):
    add_share(share_link_id='ar-pub001')
    r = client.post('/admin/shares/ar-pub001/qr', headers={**ADMIN, 'Accept': 'image/png'})
    assert r.status_code == 200
    assert r.mimetype == 'image/png'


def test_issue_qr_unknown_share(client):
    assert client.post('/admin/shares/ar-missing/qr', headers=ADMIN).status_code == 404


def test_create_share_generates_code_by_default(client):
    body = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair'}).get_json()
    code = body['access_code']
    assert len(code) == 6
    assert code.isalnum() and code == code.upper()
    assert body['status'] == 'Pending'

    page = client.get(f"/ar-client-preview?id={body['share_link_id']}")
    assert b'Access Required' in page.data


def test_create_public_share(client):
    body = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair', 'public': True}).get_json()
    assert body['access_code'] is None
    page = client.get(f"/ar-client-preview?id={body['share_link_id']}")
    assert b'Access Required' not in page.data


def test_create_share_status(client):
    body = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair', 'status': 'Approved'}).get_json()
    assert body['status'] == 'Approved'
    r = client.post('/admin/shares', headers=ADMIN, json={'product_name': 'Chair', 'status': 'Shipped'})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'invalid_status'
