"""Tests for URL rewriting in rendered post bodies."""

from scriptedstuff.services.url_rewriter import (
    ImageSrcCollector,
    _stays_inside_unit,
    rewrite_image_urls,
)


class TestImageSrcCollector:
    """Tests for the ImageSrcCollector HTML parser."""

    def test_collects_img_src(self):
        """Test that img src attributes are collected."""
        collector = ImageSrcCollector()
        collector.feed('<img src="image.png" alt="test">')
        assert collector.sources == ["image.png"]

    def test_collects_multiple_images(self):
        collector = ImageSrcCollector()
        collector.feed('<img src="a.png"><p>text</p><img src="b.jpg">')
        assert collector.sources == ["a.png", "b.jpg"]

    def test_ignores_non_img_tags(self):
        collector = ImageSrcCollector()
        collector.feed('<a href="link.html">text</a><script src="app.js"></script>')
        assert collector.sources == []

    def test_handles_empty_src(self):
        collector = ImageSrcCollector()
        collector.feed('<img src="" alt="empty">')
        assert collector.sources == []


class TestStaysInsideUnit:
    """Tests for the traversal check."""

    def test_plain_and_nested_paths(self):
        assert _stays_inside_unit("pic.png") is True
        assert _stays_inside_unit("images/pic.png") is True

    def test_rejects_parent_segments(self):
        assert _stays_inside_unit("../other-post/pic.png") is False
        assert _stays_inside_unit("images/../../pic.png") is False

    def test_rejects_url_encoded_traversal(self):
        assert _stays_inside_unit("%2e%2e/pic.png") is False

    def test_rejects_absolute(self):
        assert _stays_inside_unit("/etc/passwd") is False


class TestRewriteImageUrls:
    """Tests for rewrite_image_urls."""

    def test_rewrites_relative_image(self):
        html = '<p><img alt="x" src="diagram.png"></p>'
        result = rewrite_image_urls(html, "/posts/hello")
        assert 'src="/posts/hello/diagram.png"' in result

    def test_rewrites_dot_slash_image(self):
        html = '<img src="./images/shot.webp">'
        result = rewrite_image_urls(html, "/posts/hello")
        assert result == '<img src="/posts/hello/images/shot.webp">'

    def test_single_quotes(self):
        html = "<img src='pic.png'>"
        assert rewrite_image_urls(html, "/posts/a") == "<img src='/posts/a/pic.png'>"

    def test_leaves_absolute_urls(self):
        html = '<img src="https://example.com/a.png"><img src="/static/b.png"><img src="data:image/png;base64,AA">'
        assert rewrite_image_urls(html, "/posts/a") == html

    def test_leaves_traversal_untouched(self):
        html = '<img src="../secret.png">'
        assert rewrite_image_urls(html, "/posts/a") == html

    def test_no_images_fast_path(self):
        html = "<p>No images here</p>"
        assert rewrite_image_urls(html, "/posts/a") is html
