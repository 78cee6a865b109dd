import pytest


@pytest.fixture
def category(client, admin_headers):
    r = client.post("/api/skill-categories", json={"name": "Frontend", "order": 0}, headers=admin_headers)
    assert r.status_code == 201
    return r.json()


def _add_skill(client, headers, category_id, name, order=0):
    return client.post(
        "/api/skills",
        json={"skillCategoryId": category_id, "name": name, "order": order},
        headers=headers,
    )


def test_category_name_is_unique(client, admin_headers, category):
    r = client.post("/api/skill-categories", json={"name": "Frontend", "order": 1}, headers=admin_headers)
    assert r.status_code == 409
    assert r.json() == {"error": "Category with name 'Frontend' already exists."}


def test_skill_name_unique_within_category(client, admin_headers, category):
    assert _add_skill(client, admin_headers, category["id"], "React").status_code == 201
    r = _add_skill(client, admin_headers, category["id"], "React")
    assert r.status_code == 409
    assert r.json() == {"error": "Skill 'React' already exists in this category."}

    other = client.post("/api/skill-categories", json={"name": "Backend", "order": 1}, headers=admin_headers).json()
    assert _add_skill(client, admin_headers, other["id"], "React").status_code == 201


def test_skill_requires_category(client, admin_headers):
    r = _add_skill(client, admin_headers, 42, "Go")
    assert r.status_code == 404
    assert r.json() == {"error": "Skill category with ID 42 not found."}


def test_deleting_category_removes_skills(client, admin_headers, category):
    _add_skill(client, admin_headers, category["id"], "React")
    _add_skill(client, admin_headers, category["id"], "CSS", order=1)

    r = client.delete(f"/api/skill-categories/{category['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert client.get(f"/api/skills?categoryId={category['id']}").json() == []
    assert client.get("/api/skills").json() == []


def test_include_skills(client, admin_headers, category):
    _add_skill(client, admin_headers, category["id"], "CSS", order=1)
    _add_skill(client, admin_headers, category["id"], "React", order=0)

    plain = client.get("/api/skill-categories").json()
    assert "skills" not in plain[0]

    nested = client.get("/api/skill-categories?includeSkills=true").json()
    assert [s["name"] for s in nested[0]["skills"]] == ["React", "CSS"]


def test_skills_ordered_by_category_then_order(client, admin_headers, category):
    backend = client.post("/api/skill-categories", json={"name": "Backend", "order": 1}, headers=admin_headers).json()
    _add_skill(client, admin_headers, backend["id"], "Python", order=0)
    _add_skill(client, admin_headers, category["id"], "CSS", order=5)
    _add_skill(client, admin_headers, category["id"], "React", order=1)

    names = [s["name"] for s in client.get("/api/skills").json()]
    assert names == ["React", "CSS", "Python"]


def test_patch_skill_rename_conflict(client, admin_headers, category):
    _add_skill(client, admin_headers, category["id"], "React")
    css = _add_skill(client, admin_headers, category["id"], "CSS").json()

    r = client.patch(f"/api/skills/{css['id']}", json={"name": "React"}, headers=admin_headers)
    assert r.status_code == 409

    r = client.patch(f"/api/skills/{css['id']}", json={"order": 3}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["name"] == "CSS"
    assert r.json()["order"] == 3


def test_skill_mutations_need_admin(client, user_headers, category):
    assert _add_skill(client, user_headers, category["id"], "Vue").status_code == 403
    assert _add_skill(client, {}, category["id"], "Vue").status_code == 401


def test_category_listing_is_documented_and_keeps_empty_skill_lists(client, category):
    nested = client.get("/api/skill-categories?includeSkills=true").json()
    assert nested[0]["skills"] == []
    assert nested[0]["name"] == category["name"]

    op = client.get("/openapi.json").json()["paths"]["/api/skill-categories"]["get"]
    schema = op["responses"]["200"]["content"]["application/json"]["schema"]
    refs = str(schema)
    assert "SkillCategoryWithSkills" in refs
    assert "SkillCategoryOut" in refs
