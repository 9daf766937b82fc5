"""Tests for share-link creation and the public share routes."""

import json


def _share(client, auth_headers, name):
    response = client.post(f'/api/share/{name}', headers=auth_headers)
    assert response.status_code == 200, response.text
    return response.json()


def test_create_share_link(client, auth_headers, upload, app_settings):
    name = upload('slides.pdf', b'%PDF-1.4')
    data = _share(client, auth_headers, name)

    assert data['shareUrl'].endswith(f"/share/{data['shareId']}")
    with open(app_settings.SHARE_LINKS_FILE) as f:
        index = json.load(f)
    record = index[data['shareId']]
    assert record['filename'] == name
    assert record['originalName'] == 'slides.pdf'
    assert record['downloads'] == 0


def test_share_url_uses_public_base_url(client, auth_headers, upload, app_settings, monkeypatch):
    monkeypatch.setattr(app_settings, 'PUBLIC_BASE_URL', 'https://files.example.org/')
    name = upload('a.txt', b'a')
    data = _share(client, auth_headers, name)
    assert data['shareUrl'] == f"https://files.example.org/share/{data['shareId']}"


def test_share_missing_file(client, auth_headers):
    response = client.post('/api/share/1-2-ghost.txt', headers=auth_headers)
    assert response.status_code == 404


def test_share_requires_auth(client, upload):
    name = upload('a.txt', b'a')
    assert client.post(f'/api/share/{name}').status_code == 401


def test_landing_page_is_public(client, auth_headers, upload):
    name = upload('holiday photo.jpg', b'jpegbytes')
    share_id = _share(client, auth_headers, name)['shareId']

    response = client.get(f'/share/{share_id}')
    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/html')
    assert 'holiday photo.jpg' in response.text
    assert f'/api/share-download/{share_id}' in response.text
    assert 'image/jpeg' in response.text


def test_landing_page_does_not_count_download(client, auth_headers, upload, app_settings):
    name = upload('a.txt', b'a')
    share_id = _share(client, auth_headers, name)['shareId']

    client.get(f'/share/{share_id}')
    with open(app_settings.SHARE_LINKS_FILE) as f:
        assert json.load(f)[share_id]['downloads'] == 0


def test_landing_page_unknown_id(client):
    response = client.get('/share/0123456789abcdef')
    assert response.status_code == 404
    assert 'File Not Found' in response.text


def test_landing_page_file_deleted(client, auth_headers, upload):
    name = upload('a.txt', b'a')
    share_id = _share(client, auth_headers, name)['shareId']
    client.delete(f'/api/files/{name}', headers=auth_headers)

    response = client.get(f'/share/{share_id}')
    assert response.status_code == 404
    assert 'no longer exists' in response.text


def test_share_download_counts_each_download(client, auth_headers, upload, app_settings):
    payload = b'shared payload'
    name = upload('shared.txt', payload)
    share_id = _share(client, auth_headers, name)['shareId']

    for expected in (1, 2, 3):
        response = client.get(f'/api/share-download/{share_id}')
        assert response.status_code == 200
        assert response.content == payload
        assert 'shared.txt' in response.headers['content-disposition']
        with open(app_settings.SHARE_LINKS_FILE) as f:
            assert json.load(f)[share_id]['downloads'] == expected


def test_share_download_unknown_id(client):
    response = client.get('/api/share-download/feedface')
    assert response.status_code == 404


def test_share_download_after_file_deleted(client, auth_headers, upload, app_settings):
    name = upload('a.txt', b'a')
    share_id = _share(client, auth_headers, name)['shareId']
    client.delete(f'/api/files/{name}', headers=auth_headers)

    assert client.get(f'/api/share-download/{share_id}').status_code == 404
    with open(app_settings.SHARE_LINKS_FILE) as f:
        assert json.load(f)[share_id]['downloads'] == 0


def test_share_url_from_multi_hop_forwarded_header(client, auth_headers, upload):
    name = upload('a.txt', b'a')
    headers = dict(auth_headers)
    headers['Forwarded'] = 'for=1.1.1.1;proto=https;host=files.example.org, for=2.2.2.2'

    data = client.post(f'/api/share/{name}', headers=headers).json()
    assert data['shareUrl'] == f"https://files.example.org/share/{data['shareId']}"


def test_share_url_from_x_forwarded_headers(client, auth_headers, upload):
    name = upload('a.txt', b'a')
    headers = dict(auth_headers)
    headers['X-Forwarded-Proto'] = 'https, http'
    headers['X-Forwarded-Host'] = 'drive.example.net, internal:8080'

    data = client.post(f'/api/share/{name}', headers=headers).json()
    assert data['shareUrl'] == f"https://drive.example.net/share/{data['shareId']}"


def test_share_url_falls_back_to_request_origin(client, auth_headers, upload):
    name = upload('a.txt', b'a')
    data = client.post(f'/api/share/{name}', headers=auth_headers).json()
    assert data['shareUrl'] == f"http://testserver/share/{data['shareId']}"


def test_landing_page_shows_size(client, auth_headers, upload):
    name = upload('big.bin', b'x' * (1024 * 1024))
    share_id = _share(client, auth_headers, name)['shareId']

    response = client.get(f'/share/{share_id}')
    assert '1.00 MB' in response.text
