from scripts import build_static


def test_build_site_writes_enumerated_posts(prismic_client, tmp_path):
    output = tmp_path / "site"

    written = build_static.build_site(output, "blog", prismic_client)

    assert written == 3
    middle = (output / "post" / "middle-post" / "index.html").read_text(encoding="utf-8")
    assert '<h1 class="title">Middle post</h1>' in middle
    assert 'href="/blog/post/first-post/"' in middle
    assert "/blog/static/css/site.css" in middle
    assert (output / "static" / "css" / "site.css").exists()
    assert not (output / "post" / "fallback.html").exists()


def test_fallback_shell_is_written_on_request(prismic_client, tmp_path):
    output = tmp_path / "site"

    build_static.build_site(output, "", prismic_client, with_fallback=True)

    fallback = (output / "post" / "fallback.html").read_text(encoding="utf-8")
    assert "Carregando..." in fallback
    assert 'data-render-state="resolving"' in fallback


def test_url_factory_without_base_url():
    builder = build_static.build_url_factory("")
    assert builder("post_detail", {"slug": "a"}) == "/post/a/"
    assert builder("static", {"path": "/css/site.css"}) == "/static/css/site.css"
