from extractor import SECTION_CHECKS, extract
from report_model import Presence


def items_by_label(section):
    return {item.label: item for item in section.items}


def test_sections_follow_pipeline_order(full_document):
    model = extract(full_document)
    assert [s.title for s in model.sections] == [
        "Title", "Meta Tags", "Open Graph", "Twitter Cards", "Headings", "Image ALT"
    ]
    assert model.url == full_document.url


def test_extraction_is_deterministic(make_document, full_html):
    document = make_document(full_html)
    first = extract(document)
    second = extract(document)
    assert first == second
    assert first is not second
    assert extract(make_document(full_html)) == first


def test_extraction_does_not_touch_the_document(full_document):
    before = full_document.to_html()
    extract(full_document)
    assert full_document.to_html() == before


def test_title_is_whitespace_collapsed(full_document):
    title = extract(full_document).section("Title").items[0]
    assert title.label == "Title"
    assert title.value == "Acme Widgets | Home"
    assert title.presence == Presence.PRESENT


def test_core_meta_values(full_document):
    meta = items_by_label(extract(full_document).section("Meta Tags"))
    assert list(meta) == ["Meta Description", "Meta Keywords", "Viewport", "Charset", "Canonical URL"]
    assert meta["Meta Description"].value == "Hand-made widgets since 1999."
    assert meta["Meta Keywords"].value == "widgets, acme"
    assert meta["Viewport"].value == "width=device-width, initial-scale=1"
    assert meta["Charset"].value == "utf-8"
    assert meta["Canonical URL"].value == "https://acme.test/home"


def test_absent_core_meta_is_null_not_missing(bare_document):
    model = extract(bare_document)
    assert model.section("Title").items[0].presence == Presence.NULL
    for item in model.section("Meta Tags").items:
        assert item.value is None
        assert item.presence == Presence.NULL


def test_charset_falls_back_to_content_type(make_document):
    html = '<html><head><meta http-equiv="content-type" content="text/html; charset=ISO-8859-1"></head></html>'
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Charset"].value == "text/html; charset=ISO-8859-1"


def test_explicit_charset_wins_over_content_type(make_document):
    html = ('<html><head><meta http-equiv="Content-Type" content="text/html; charset=latin1">'
            '<meta charset="UTF-8"></head></html>')
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Charset"].value == "UTF-8"


def test_canonical_respects_base_href(make_document):
    html = ('<html><head><base href="https://cdn.acme.test/en/">'
            '<link rel="canonical" href="page"></head></html>')
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Canonical URL"].value == "https://cdn.acme.test/en/page"


def test_canonical_kept_raw_without_document_url(make_document):
    html = '<html><head><link rel="canonical" href="/about"></head></html>'
    meta = items_by_label(extract(make_document(html, url=None)).section("Meta Tags"))
    assert meta["Canonical URL"].value == "/about"


def test_canonical_rel_is_case_insensitive(make_document):
    html = '<html><head><link rel="Canonical" href="https://acme.test/x"></head></html>'
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Canonical URL"].value == "https://acme.test/x"


def test_canonical_rel_must_be_the_whole_value(make_document):
    html = ('<html><head><link rel="alternate canonical" href="https://acme.test/alt">'
            '<link rel="stylesheet" href="/site.css"></head></html>')
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Canonical URL"].value is None


def test_empty_attributes_are_absent(make_document):
    html = '<html><head><meta name="description" content="  "><link rel="canonical" href=""></head></html>'
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Meta Description"].value is None
    assert meta["Canonical URL"].value is None


def test_first_matching_meta_tag_is_used(make_document):
    html = '<html><head><meta name="description" content="first"><meta name="description" content="second"></head></html>'
    meta = items_by_label(extract(make_document(html)).section("Meta Tags"))
    assert meta["Meta Description"].value == "first"


def test_empty_document_still_yields_every_section(make_document):
    model = extract(make_document("", url=None))
    assert len(model.sections) == 6
    assert model.section("Open Graph").items[0].presence == Presence.MISSING


def test_broken_check_only_empties_its_own_section(monkeypatch, full_document):
    def broken(document):
        raise ValueError("malformed fragment")

    checks = [(title, broken if title == "Twitter Cards" else check) for title, check in SECTION_CHECKS]
    monkeypatch.setattr("extractor.SECTION_CHECKS", checks)

    model = extract(full_document)
    assert model.section("Twitter Cards").items == ()
    assert len(model.section("Open Graph").items) == 2
    assert len(model.section("Headings").items) == 6
