import pytest
from flask_jwt_extended import create_access_token
from content_tree import create_app
from content_tree.extensions import db
from content_tree.models.tenant import Tenant
from content_tree.models.page import Page
from content_tree.models.block import Block, ELEMENT_BLOCK
from content_tree.models.section import Section
from content_tree.models.element import Element
from content_tree.domain.answers import dump_answers
from content_tree.tree.store import NodeStore


@pytest.fixture
def app():
    """Fresh app with an in-memory database per test"""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def tenant(app):
    tenant = Tenant()
    tenant.name = "First Church"
    tenant.slug = "first-church"
    db.session.add(tenant)
    db.session.commit()
    return tenant


@pytest.fixture
def other_tenant(app):
    tenant = Tenant()
    tenant.name = "Second Church"
    tenant.slug = "second-church"
    db.session.add(tenant)
    db.session.commit()
    return tenant


@pytest.fixture
def store(tenant):
    return NodeStore(tenant.id)


@pytest.fixture
def auth_headers(tenant):
    token = create_access_token(
        identity="user-1",
        additional_claims={"tenant_id": tenant.id, "role": "admin"},
    )
    return {
        "Authorization": f"Bearer {token}",
        "X-Tenant-ID": tenant.id,
    }


@pytest.fixture
def page(store):
    page = Page()
    page.title = "Home"
    page.url = "/"
    store.save(page)
    db.session.commit()
    return page


@pytest.fixture
def section(store, page):
    section = Section()
    section.page_id = page.id
    section.zone = "main"
    section.sort = 1
    store.save(section)
    db.session.commit()
    return section


@pytest.fixture
def element_block(store):
    block = Block()
    block.name = "Footer links"
    block.block_type = ELEMENT_BLOCK
    store.save(block)
    db.session.commit()
    return block


@pytest.fixture
def make_element(store):
    """Insert an element row directly, bypassing the use cases"""
    def _make(element_type, *, section=None, block=None, parent=None, sort=1, answers=None):
        element = Element()
        element.element_type = element_type
        element.section_id = section.id if section else (parent.section_id if parent else None)
        element.block_id = block.id if block else (parent.block_id if parent else None)
        element.parent_id = parent.id if parent else None
        element.sort = sort
        element.answers_json = dump_answers(answers) if answers is not None else None
        store.save(element)
        db.session.commit()
        return element
    return _make
