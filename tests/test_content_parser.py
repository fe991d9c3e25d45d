"""
Test page extraction and novel HTML normalisation.
"""
import json

from mangaverse.models.chapter import ChapterContent
from mangaverse.schemas.chapter import HtmlPayload, PagesPayload
from mangaverse.services.content_parser import (
    build_page_map,
    build_payload,
    extract_manga_pages,
    extract_novel_html,
    normalize_novel_html,
    parse_page_map,
)


def row(id, content=None, page_order=None, image_url=None):
    return ChapterContent(
        id=id, chapter_id=1, content=content, page_order=page_order, image_url=image_url
    )


class TestPageMap:
    def test_pages_sorted_numerically(self):
        raw = '{"10": "j.jpg", "2": "b.jpg", "1": "a.jpg"}'
        assert parse_page_map(raw) == ["a.jpg", "b.jpg", "j.jpg"]

    def test_trailing_comma_tolerated(self):
        assert parse_page_map('{"1": "a.jpg", "2": "b.jpg",}') == ["a.jpg", "b.jpg"]
        assert parse_page_map('{"1": "a.jpg",\n }') == ["a.jpg"]

    def test_non_string_and_empty_values_dropped(self):
        raw = '{"1": "a.jpg", "2": null, "3": "", "4": 5, "5": "e.jpg"}'
        assert parse_page_map(raw) == ["a.jpg", "e.jpg"]

    def test_invalid_input_yields_nothing(self):
        assert parse_page_map(None) == []
        assert parse_page_map("") == []
        assert parse_page_map("<p>text</p>") == []
        assert parse_page_map("{not json") == []


class TestMangaPages:
    def test_json_map_wins(self):
        rows = [row(1, content='{"1": "map.jpg"}'), row(2, image_url="row.jpg", page_order=1)]
        assert extract_manga_pages(rows) == ["map.jpg"]

    def test_falls_back_to_image_rows(self):
        rows = [
            row(1, image_url="p1.jpg", page_order=1),
            row(2, image_url="p2.jpg", page_order=2),
        ]
        assert extract_manga_pages(rows) == ["p1.jpg", "p2.jpg"]

    def test_falls_back_to_img_tags(self):
        html = '<div><img class="page" src="x1.jpg"><img src="x2.jpg" /></div>'
        assert extract_manga_pages([row(1, content=html)]) == ["x1.jpg", "x2.jpg"]

    def test_unparseable_content_gives_empty_list(self):
        assert extract_manga_pages([row(1, content="just words")]) == []
        assert extract_manga_pages([]) == []


class TestNovelContent:
    def test_first_row_is_used(self):
        rows = [row(1, content="<p>first</p>"), row(2, content="<p>second</p>")]
        assert extract_novel_html(rows) == "<p>first</p>"

    def test_no_rows_gives_empty_string(self):
        assert extract_novel_html([]) == ""

    def test_payload_follows_content_type(self):
        rows = [row(1, content='{"1": "a.jpg"}')]
        manga = build_payload("manga", rows)
        novel = build_payload("novel", rows)

        assert isinstance(manga, PagesPayload)
        assert manga.kind == "pages"
        assert manga.pages == ["a.jpg"]
        assert isinstance(novel, HtmlPayload)
        assert novel.kind == "html"
        assert novel.html == '{"1": "a.jpg"}'


class TestWriting:
    def test_build_page_map_is_one_based(self):
        page_map = json.loads(build_page_map(["a.jpg", " ", "b.jpg"]))
        assert page_map == {"1": "a.jpg", "2": "b.jpg"}

    def test_build_page_map_reads_back_in_order(self):
        urls = [f"https://cdn.example.com/{i}.jpg" for i in range(1, 13)]
        assert parse_page_map(build_page_map(urls)) == urls

    def test_normalize_strips_scripts_and_styles(self):
        html = "<p>Hi</p><script>alert(1)</script><style>p {color: red}</style>"
        assert normalize_novel_html(html) == "<p>Hi</p>"

    def test_normalize_wraps_bare_lines(self):
        text = "First line\n\n<p>Already wrapped</p>\nSecond line"
        assert normalize_novel_html(text) == (
            "<p>First line</p>\n<p>Already wrapped</p>\n<p>Second line</p>"
        )

    def test_normalize_maps_bold_and_italic(self):
        assert normalize_novel_html("<p><b>bold</b> <i>it</i></p>") == (
            "<p><strong>bold</strong> <em>it</em></p>"
        )
