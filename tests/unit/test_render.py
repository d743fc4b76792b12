"""Tests for HTML page rendering."""

from presskit.models import Content
from presskit.render import render_home, render_page

NAV = [{"text": "home", "link": "/"}, {"link": "/bare"}]


def test_render_home_uses_title_and_raw_html():
    html = render_home(Content(attrs={"title": "Home"}, html="<h1>Welcome</h1>"), NAV)

    assert "<title>Home</title>" in html
    assert "<h1>Welcome</h1>" in html
    assert "AI Summary" not in html
    assert 'href="/static/css/style.css"' in html


def test_render_default_title():
    html = render_home(Content(html="<p>x</p>"), NAV)

    assert "<title>Presskit</title>" in html


def test_navbar_falls_back_to_link_text():
    html = render_home(Content(), NAV)

    assert '<a class="link px-2" href="/">home</a>' in html
    assert '<a class="link px-2" href="/bare">/bare</a>' in html


def test_render_page_without_summary():
    html = render_page(Content(html="<p>body</p>"), NAV)

    assert "<h2>AI Summary</h2>" in html
    assert " No summary yet." in html
    assert "<hr />" in html
    assert html.index("<hr />") < html.index("<p>body</p>")


def test_render_page_with_summary_is_escaped():
    content = Content(html="<p>body</p>", summary={"summary": "Uses <b> tags & more"})

    html = render_page(content, NAV)

    assert "Uses &lt;b&gt; tags &amp; more" in html
    assert "No summary yet." not in html


def test_title_is_escaped():
    html = render_page(Content(attrs={"title": "<script>x</script>"}), NAV)

    assert "<title>&lt;script&gt;x&lt;/script&gt;</title>" in html
