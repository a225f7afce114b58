"""Tests for output sink, messages and markup helpers."""

from __future__ import annotations

from relatedimages.core.markup import element, link, page_url, tags, void_element
from relatedimages.core.messages import MESSAGES, get_message
from relatedimages.core.output import OutputPage
from relatedimages.core.titles import NS_CATEGORY, NS_FILE, make_title


class TestMessages:
    """Test localized message lookup."""

    def test_english(self):
        assert get_message("subcatimagesgallery-empty") == "No images found in subcategories."

    def test_russian(self):
        assert get_message("subcatimagesgallery", "ru") == "Изображения из подкатегорий"

    def test_unknown_language_falls_back_to_english(self):
        assert get_message("subcatimagesgallery", "xx") == "Images from subcategories"

    def test_missing_key(self):
        assert get_message("no-such-message") == "⧼no-such-message⧽"

    def test_all_languages_define_same_keys(self):
        for language in MESSAGES:
            assert MESSAGES[language].keys() == MESSAGES["en"].keys()

    def test_only_rendered_messages_defined(self):
        assert set(MESSAGES["en"]) == {
            "subcatimagesgallery",
            "subcatimagesgallery-empty",
            "badtitletext",
        }


class TestMarkup:
    """Test HTML helpers."""

    def test_tags_keeps_contents_raw(self):
        assert tags("h3", None, "<b>x</b>") == "<h3><b>x</b></h3>"

    def test_attributes_escaped(self):
        assert tags("div", {"class": 'a"b'}, "") == '<div class="a&quot;b"></div>'

    def test_none_attributes_skipped(self):
        assert void_element("img", {"src": "a.jpg", "width": None}) == '<img src="a.jpg">'

    def test_element_escapes_text(self):
        assert element("p", None, "a < b & c") == "<p>a &lt; b &amp; c</p>"

    def test_page_url(self):
        title = make_title(NS_FILE, "Été ô.jpg")
        assert page_url(title, "/wiki/$1") == "/wiki/File:%C3%89t%C3%A9%20%C3%B4.jpg"

    def test_page_url_with_query_style_article_path(self):
        title = make_title(NS_CATEGORY, "Birds")
        assert page_url(title, "/index.php?title=$1") == "/index.php?title=Category:Birds"

    def test_link(self):
        title = make_title(NS_CATEGORY, "Birds_&_bees")
        assert link(title, title.text) == (
            '<a href="/wiki/Category:Birds_%26_bees" title="Category:Birds &amp; bees">'
            "Birds &amp; bees</a>"
        )


class TestOutputPage:
    """Test the response sink."""

    def test_defaults(self):
        out = OutputPage()
        assert out.status_code == 200
        assert out.get_html() == ""

    def test_status_code(self):
        out = OutputPage()
        out.set_status_code(404)
        assert out.status_code == 404

    def test_fragments_in_order(self):
        out = OutputPage()
        out.add_wiki_msg("subcatimagesgallery-empty")
        out.add_html("<div></div>")
        assert out.get_html() == "<p>No images found in subcategories.</p>\n<div></div>"

    def test_language(self):
        out = OutputPage("ru")
        assert out.msg("subcatimagesgallery") == "Изображения из подкатегорий"
