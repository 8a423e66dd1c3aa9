from kroki_bridge.render.scaling import apply_scale

from kroki_samples import PLAIN_SVG

SIMPLE_SVG = b'<svg width="100px" height="50px"><rect width="10" height="10"/></svg>'


def test_scale_doubles_root_dimensions() -> None:
    scaled = apply_scale(SIMPLE_SVG, 2.0, "svg")
    assert b'<svg width="200.00px" height="100.00px">' in scaled
    # nested elements are untouched
    assert b'<rect width="10" height="10"/>' in scaled


def test_scale_one_is_byte_identical() -> None:
    assert apply_scale(SIMPLE_SVG, 1.0, "svg") is SIMPLE_SVG


def test_base64_is_exempt() -> None:
    assert apply_scale(SIMPLE_SVG, 2.0, "base64") == SIMPLE_SVG


def test_binary_formats_are_exempt() -> None:
    assert apply_scale(b"\x89PNG\r\n", 3.0, "png") == b"\x89PNG\r\n"


def test_unitless_dimensions_default_to_px() -> None:
    scaled = apply_scale(b'<svg height="40" width="12.5">', 2.0, "svg")
    assert scaled == b'<svg height="80.00px" width="25.00px">'


def test_units_are_preserved_when_shrinking() -> None:
    scaled = apply_scale(b"<svg width='10cm' height='4in'></svg>", 0.5, "svg")
    assert scaled == b"<svg width='5.00cm' height='2.00in'></svg>"


def test_missing_attribute_is_not_inserted() -> None:
    scaled = apply_scale(b'<svg viewBox="0 0 10 10" width="10"></svg>', 2.0, "svg")
    assert scaled == b'<svg viewBox="0 0 10 10" width="20.00px"></svg>'


def test_stroke_width_is_not_mistaken_for_width() -> None:
    scaled = apply_scale(b'<svg stroke-width="3" height="10"></svg>', 2.0, "svg")
    assert scaled == b'<svg stroke-width="3" height="20.00px"></svg>'


def test_only_first_svg_tag_is_scaled() -> None:
    doc = b'<svg width="10"><svg width="10"></svg></svg>'
    assert apply_scale(doc, 2.0, "svg") == b'<svg width="20.00px"><svg width="10"></svg></svg>'


def test_xml_prolog_and_attributes_survive() -> None:
    scaled = apply_scale(PLAIN_SVG, 2.0, "svg")
    assert scaled.startswith(b'<?xml version="1.0" encoding="UTF-8"?>')
    assert b'viewBox="0 0 100 50"' in scaled
    assert b'width="200.00px" height="100.00px"' in scaled


def test_malformed_dimension_returns_original() -> None:
    doc = b'<svg width="auto" height="50"></svg>'
    assert apply_scale(doc, 2.0, "svg") == doc


def test_undecodable_bytes_return_original() -> None:
    doc = b'<svg width="10">\xff\xfe</svg>'
    assert apply_scale(doc, 2.0, "svg") == doc
