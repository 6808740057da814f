import json

import pytest

from alloy.document import DocumentData, document_for_page, error_payload, render_document
from alloy.env import set_production
from alloy.errors import RenderError
from alloy.page import Link, MetaTag, Page


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("Alloy_ENV", raising=False)
    set_production(False)
    yield
    set_production(False)


def test_rendered_content_is_inserted_unescaped():
    html = render_document(DocumentData(rendered_content="<h1>Hello</h1>", title="Home"))
    assert '<div id="page"><h1>Hello</h1></div>' in html
    assert "<title>Home</title>" in html
    assert html.startswith("<!DOCTYPE html>")


def test_hydration_scripts_follow_flag():
    props = json.dumps({"message": "hi"})
    data = DocumentData(initial_props=props, js="/.alloy/pages/index.js", hydrate=True)
    hydrated = render_document(data)
    assert f"window.PAGE_PROPS = {props};" in hydrated
    assert '<script type="module" src="/.alloy/pages/index.js"></script>' in hydrated

    data.hydrate = False
    static = render_document(data)
    assert "PAGE_PROPS" not in static


def test_dev_script_only_in_dev():
    assert "new WebSocket" in render_document(DocumentData(is_dev=True))
    assert "new WebSocket" not in render_document(DocumentData(is_dev=False))


def test_head_tags_and_attributes_are_escaped():
    data = DocumentData(
        lang="en",
        css_class="dark",
        meta_tags=[MetaTag(name="description", content='a "quoted" value')],
        links=[Link(rel="preconnect", href="/fonts")],
    )
    html = render_document(data)
    assert '<html lang="en" class="dark">' in html
    assert '"quoted"' not in html
    assert 'name="description"' in html
    assert '<link rel="preconnect" href="/fonts" />' in html


def test_document_for_page_uses_page_settings():
    page = Page(route="/", file="pages/index.tsx", title="Welcome", lang="en", css_class="c")
    html = document_for_page(
        page, "<p>body</p>", "{}", ".alloy/pages/index.js", ".alloy/pages/index.css"
    )
    assert '<link rel="stylesheet" href="/.alloy/pages/index.css" />' in html
    assert 'src="/.alloy/pages/index.js"' in html
    assert "<title>Welcome</title>" in html
    assert "<p>body</p>" in html
    assert "new WebSocket" in html


def test_document_for_page_in_production_has_no_dev_script(monkeypatch):
    monkeypatch.setenv("Alloy_ENV", "production")
    page = Page(route="/", file="pages/index.tsx", interactive=False)
    html = document_for_page(page, "", "{}", "a.js", "a.css")
    assert "new WebSocket" not in html
    assert "PAGE_PROPS" not in html


def test_error_payload_with_render_error():
    err = RenderError("loader execution", "Loader failed", "boom")
    payload = error_payload(err, "/about", "pages/about.tsx")
    assert payload == {
        "error": "❌ Rendering failed at loader execution: Loader failed\n   Details: boom",
        "page": "/about",
        "file": "pages/about.tsx",
    }


def test_error_payload_omits_missing_fields():
    err = RenderError("template parsing", "Internal template error")
    assert error_payload(err) == {"error": str(err)}
    assert error_payload(err, "/x") == {"error": str(err), "page": "/x"}