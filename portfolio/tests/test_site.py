from datetime import date

from portfolio.models import BuilderData, ExperienceComponent, HeroComponent, Page, Skill, SkillCategory
from portfolio.routes.site import inline_style


def test_home_renders_sections(client, db, page):
    db.add(HeroComponent(page_id=page.id, order=0, headline="Hi there", cta_label="Say hi", cta_link="mailto:me@x.io"))
    db.add(ExperienceComponent(page_id=page.id, order=0, job_title="Engineer", company="Acme",
                               start_date=date(2020, 1, 1)))
    category = SkillCategory(name="Backend", order=0)
    category.skills.append(Skill(name="Python", order=0))
    db.add(category)
    db.commit()

    r = client.get("/")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    html = r.text
    assert "Hi there" in html
    assert "Engineer" in html and "Present" in html
    assert "Python" in html


def test_unpublished_slug_is_404_page(client, db):
    db.add(Page(slug="draft", title="Draft", is_published=False))
    db.commit()
    r = client.get("/p/draft")
    assert r.status_code == 404
    assert "Page not found" in r.text


def test_published_slug_renders(client, db):
    db.add(Page(slug="cv", title="Curriculum", is_published=True))
    db.commit()
    r = client.get("/p/cv")
    assert r.status_code == 200
    assert "Curriculum" in r.text


def test_admin_console_shell(client):
    r = client.get("/admin")
    assert r.status_code == 200
    html = r.text
    assert "/api/auth/login" in html
    # rows can be edited in place and images sent to the upload relay
    assert "PATCH" in html
    assert "/api/upload" in html
    assert 'id="cancel"' in html


def test_contact_section_and_default_cta(client, db, page):
    db.add(HeroComponent(page_id=page.id, order=0, headline="Hi there"))
    db.commit()

    html = client.get("/").text
    assert 'id="contact"' in html
    assert 'href="mailto:default-contact@example.com"' in html
    # hero without a link points at the contact section
    assert 'href="#contact"' in html
    assert "Contact Me" in html


def _builder_row(page_id):
    return BuilderData(
        page_id=page_id,
        version=3,
        elements=[
            {
                "id": "element-1",
                "type": "section",
                "styles": {"backgroundColor": "#f5f5f5", "left": "10px"},
                "children": [
                    {"id": "element-2", "type": "heading", "parent": "element-1",
                     "props": {"content": "Built <here>", "level": 1}},
                    {"id": "element-3", "type": "button", "parent": "element-1",
                     "props": {"content": "Hire me", "href": "#contact"}},
                    {"id": "element-4", "type": "form", "parent": "element-1",
                     "props": {"submitLabel": "Send", "fields": [{"name": "email", "inputType": "email"}]}},
                ],
            }
        ],
        theme={"colors": {"primary": "#ff0000"}, "typography": {"headingFont": "Lora"}},
    )


def test_builder_preview_renders_tree_with_theme(client, db, page):
    db.add(_builder_row(page.id))
    db.commit()

    r = client.get("/p/home/preview")
    assert r.status_code == 200
    html = r.text
    assert "--color-primary: #ff0000;" in html
    assert "--font-heading: Lora, sans-serif;" in html
    # untouched theme sections use defaults
    assert "--spacing-section-gap: 64px;" in html
    assert '<section id="element-1" class="el el-section" style="background-color: #f5f5f5; left: 10px">' in html
    assert "<h1>Built &lt;here&gt;</h1>" in html
    assert 'class="btn-primary" href="#contact">Hire me</a>' in html
    assert '<input type="email" name="email">' in html
    assert ">Send</button>" in html
    assert 'data-version="3"' in html


def test_builder_preview_missing(client, db, page):
    assert client.get("/p/home/preview").status_code == 404

    db.add(Page(slug="draft", title="Draft", is_published=False))
    db.commit()
    draft = db.query(Page).filter_by(slug="draft").one()
    db.add(_builder_row(draft.id))
    db.commit()
    r = client.get("/p/draft/preview")
    assert r.status_code == 404
    assert "Page not found" in r.text


def test_inline_style_kebab_cases_keys():
    assert inline_style({"backgroundColor": "#fff", "zIndex": "2", "width": "100%", "color": ""}) == (
        "background-color: #fff; z-index: 2; width: 100%"
    )
    assert inline_style(None) == ""
