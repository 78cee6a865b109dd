import pytest


def _hero(page_id):
    return {"pageId": page_id, "order": 0, "headline": "Hello", "ctaLabel": "Say hi", "imageUrl": "/me.jpg"}


def _education(page_id):
    return {"pageId": page_id, "order": 0, "institution": "MIT", "degree": "BSc", "startDate": "2015-09-01"}


def _page(page_id):
    return {"slug": "projects", "title": "Projects", "isPublished": True, "aboutContent": "Things I built"}


def _category(page_id):
    return {"name": "Languages", "order": 2}


MUTATIONS = [
    ("post", "/api/hero", _hero),
    ("put", "/api/hero/1", _hero),
    ("patch", "/api/hero/1", lambda page_id: {"headline": "Changed"}),
    ("delete", "/api/hero/1", None),
    ("post", "/api/education", _education),
    ("put", "/api/education/1", _education),
    ("patch", "/api/education/1", lambda page_id: {"degree": "MSc"}),
    ("delete", "/api/education/1", None),
    ("post", "/api/pages", _page),
    ("put", "/api/pages/1", _page),
    ("patch", "/api/pages/1", lambda page_id: {"title": "Changed"}),
    ("delete", "/api/pages/1", None),
    ("post", "/api/skill-categories", _category),
    ("put", "/api/skill-categories/1", _category),
    ("patch", "/api/skill-categories/1", lambda page_id: {"name": "Changed"}),
    ("delete", "/api/skill-categories/1", None),
]


def _call(client, method, path, body, headers=None):
    kwargs = {"headers": headers or {}}
    if body is not None:
        kwargs["json"] = body
    return client.request(method.upper(), path, **kwargs)


@pytest.mark.parametrize("method,path,make_body", MUTATIONS)
def test_mutation_without_token_is_401(client, page, method, path, make_body):
    body = make_body(page.id) if make_body else None
    r = _call(client, method, path, body)
    assert r.status_code == 401


@pytest.mark.parametrize("method,path,make_body", MUTATIONS)
def test_mutation_as_plain_user_is_403(client, page, user_headers, method, path, make_body):
    body = make_body(page.id) if make_body else None
    r = _call(client, method, path, body, user_headers)
    assert r.status_code == 403


@pytest.mark.parametrize(
    "create_path,make_body,read_path",
    [
        ("/api/hero", _hero, "/api/hero/{id}"),
        ("/api/education", _education, "/api/education/{id}"),
        ("/api/pages", _page, "/api/pages/{slug}"),
        ("/api/skill-categories", _category, "/api/skill-categories/{id}"),
    ],
)
def test_created_resource_reads_back(client, admin_headers, page, create_path, make_body, read_path):
    body = make_body(page.id)
    r = client.post(create_path, json=body, headers=admin_headers)
    assert r.status_code == 201
    created = r.json()
    assert isinstance(created["id"], int)

    r = client.get(read_path.format(**created))
    assert r.status_code == 200
    stored = r.json()
    for key, value in body.items():
        assert stored[key] == value, key
    assert stored["id"] == created["id"]
