"""
Icon font build tests.

Run full builds into temporary directories and check the outputs.
"""

import re
from concurrent.futures import Future, InvalidStateError
from io import BytesIO

import pytest
from fontTools.ttLib import TTFont

from iconfont_builder.config.deployments import StylesheetFlavor
from iconfont_builder.config.options import IconFontOptions
from iconfont_builder.core.eot import extract_font_data
from iconfont_builder.operations.clean import clean
from iconfont_builder.operations.iconfont import (
    build_iconfont,
    generate_font,
    render_stylesheet,
)
from iconfont_builder.pipeline.validate import validate_deployment
from tests.conftest import BAR_SVG, CIRCLE_SVG, HOME_SVG, write_svgs

RULE = re.compile(r"\.icon-([\w-]+):before")


def stylesheet_classes(path):
    """Glyph names with a rule in a rendered stylesheet."""
    return set(RULE.findall(path.read_text(encoding="utf-8")))


def font_cmap(path):
    """cmap of any font file, EOT included."""
    data = path.read_bytes()
    if path.suffix == ".eot":
        data = extract_font_data(data)
    font = TTFont(BytesIO(data))
    cmap = dict(font.getBestCmap())
    font.close()
    return cmap


def test_single_home_icon(source_dir, make_deployment):
    """Test home.svg produces four font files and an icon-home rule."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment()

    result = build_iconfont(deployment)

    assert sorted(p.name for p in deployment.font_dir.iterdir()) == [
        "iconfont.eot",
        "iconfont.ttf",
        "iconfont.woff",
        "iconfont.woff2",
    ]
    assert result.stylesheet == deployment.stylesheet_path
    assert stylesheet_classes(result.stylesheet) == {"home"}
    assert '.icon-home:before {\n  content: "\\ea01";' in result.stylesheet.read_text()


def test_file_count_matches_formats(source_dir, make_deployment):
    """Test one font file is written per requested format."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment(options=IconFontOptions(formats=("ttf", "woff2")))

    result = build_iconfont(deployment)

    assert len(result.font_files) == 2
    assert sorted(p.suffix for p in result.font_files) == [".ttf", ".woff2"]


def test_stylesheet_matches_manifest(source_dir, make_deployment):
    """Test the stylesheet has a rule for every manifest glyph and no others."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG, "bar": BAR_SVG})
    deployment = make_deployment()

    result = build_iconfont(deployment)

    names = {glyph.name for glyph in result.manifest.glyphs}
    assert names == {"home", "circle", "bar"}
    assert stylesheet_classes(result.stylesheet) == names


def test_every_format_has_manifest_codepoints(source_dir, make_deployment):
    """Test all formats map the manifest codepoints to the manifest glyphs."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG})
    deployment = make_deployment()

    result = build_iconfont(deployment)

    expected = {glyph.codepoint: glyph.name for glyph in result.manifest.glyphs}
    for path in result.font_files:
        assert font_cmap(path) == expected, path.name


def test_empty_source_directory(source_dir, make_deployment):
    """Test no SVGs still produces fonts and a stylesheet without rules."""
    deployment = make_deployment()

    result = build_iconfont(deployment)

    assert result.manifest.glyphs == ()
    assert len(result.font_files) == 4
    font = TTFont(deployment.font_dir / "iconfont.ttf")
    assert font.getGlyphOrder() == [".notdef"]
    font.close()
    assert stylesheet_classes(result.stylesheet) == set()


def test_missing_source_directory(tmp_path, make_deployment):
    """Test a missing source directory aborts the build."""
    deployment = make_deployment()
    deployment.source_dir.rmdir()

    with pytest.raises(FileNotFoundError):
        build_iconfont(deployment)
    assert not deployment.stylesheet_path.exists()


def test_unmappable_marker_aborts_build(source_dir, make_deployment):
    """Test a marker beyond U+10FFFF fails before anything is written."""
    write_svgs(source_dir, {"u110000-home": HOME_SVG})
    deployment = make_deployment()

    with pytest.raises(ValueError, match="Invalid codepoint U\\+110000"):
        build_iconfont(deployment)
    assert not deployment.font_dir.exists() or not any(deployment.font_dir.iterdir())
    assert not deployment.stylesheet_path.exists()
    assert (source_dir / "u110000-home.svg").exists()


def test_rebuild_keeps_assignments(source_dir, make_deployment):
    """Test rebuilding unchanged sources keeps glyph codepoints."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG})
    deployment = make_deployment()

    first = build_iconfont(deployment)
    first_cmap = font_cmap(deployment.font_dir / "iconfont.ttf")
    second = build_iconfont(deployment)

    assert [(g.name, g.codepoint) for g in first.manifest.glyphs] == [
        (g.name, g.codepoint) for g in second.manifest.glyphs
    ]
    assert font_cmap(deployment.font_dir / "iconfont.ttf") == first_cmap


def test_rebuild_without_markers_keeps_assignments(source_dir, make_deployment):
    """Test assignments are stable even when sources are not renamed."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG})
    deployment = make_deployment(options=IconFontOptions(append_codepoints=False))

    first = build_iconfont(deployment)
    second = build_iconfont(deployment)

    assert first.manifest.glyphs == second.manifest.glyphs
    assert sorted(p.name for p in source_dir.iterdir()) == ["circle.svg", "home.svg"]


def test_append_codepoints_renames_sources(source_dir, make_deployment):
    """Test sources are renamed to carry their assigned codepoints."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG})

    build_iconfont(make_deployment())

    assert sorted(p.name for p in source_dir.iterdir()) == [
        "uEA01-circle.svg",
        "uEA02-home.svg",
    ]


def test_append_unicode_glyph_names(source_dir, make_deployment):
    """Test glyphs are named after codepoints with append_unicode."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment(options=IconFontOptions(append_unicode=True))

    build_iconfont(deployment)

    font = TTFont(deployment.font_dir / "iconfont.ttf")
    assert font.getGlyphOrder() == [".notdef", "uniEA01"]
    font.close()
    assert stylesheet_classes(deployment.stylesheet_path) == {"home"}


def test_scss_partial(source_dir, make_deployment):
    """Test the SCSS flavor renders a partial with the glyph map."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment(flavor=StylesheetFlavor.SCSS)

    result = build_iconfont(deployment)

    assert result.stylesheet.name == "_iconfont.scss"
    text = result.stylesheet.read_text(encoding="utf-8")
    assert '"home": "\\ea01",' in text
    assert 'url("../fonts/iconfont.woff2?v=' in text
    assert stylesheet_classes(result.stylesheet) == {"home"}


def test_manifest_delivered_once(source_dir, tmp_path):
    """Test the manifest future is resolved exactly once."""
    write_svgs(source_dir, {"home": HOME_SVG})
    on_glyphs = Future()

    generate_font(source_dir, tmp_path / "fonts", IconFontOptions(), on_glyphs)

    assert on_glyphs.done()
    manifest = on_glyphs.result()
    assert [g.name for g in manifest.glyphs] == ["home"]
    assert manifest.options == IconFontOptions()
    with pytest.raises(InvalidStateError):
        generate_font(source_dir, tmp_path / "fonts", IconFontOptions(), on_glyphs)


def test_manifest_carries_collection_error(tmp_path):
    """Test glyph collection errors reach the manifest future."""
    on_glyphs = Future()

    with pytest.raises(FileNotFoundError):
        generate_font(
            tmp_path / "missing", tmp_path / "fonts", IconFontOptions(), on_glyphs
        )

    assert isinstance(on_glyphs.exception(), FileNotFoundError)


def test_stylesheet_uses_manifest_glyphs(source_dir, make_deployment):
    """Test rendering passes manifest glyphs through unchanged."""
    write_svgs(source_dir, {"home": HOME_SVG, "circle": CIRCLE_SVG})
    deployment = make_deployment()
    on_glyphs = Future()
    generate_font(
        deployment.source_dir, deployment.font_dir, deployment.options, on_glyphs
    )

    output = render_stylesheet(deployment, on_glyphs.result())

    text = output.read_text(encoding="utf-8")
    assert text.index(".icon-circle") < text.index(".icon-home")
    assert f"v={on_glyphs.result().font_date}" in text


def test_broken_template_keeps_fonts(tmp_path, source_dir, make_deployment):
    """Test a template error aborts rendering after fonts are written."""
    from jinja2 import TemplateSyntaxError

    template = tmp_path / "broken.css"
    template.write_text("{% if %}")
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment(template_path=template)

    with pytest.raises(TemplateSyntaxError):
        build_iconfont(deployment)

    assert all(path.exists() for path in deployment.font_files())
    assert not deployment.stylesheet_path.exists()


def test_validate_built_deployment(source_dir, make_deployment):
    """Test a fresh build passes validation."""
    write_svgs(source_dir, {"home": HOME_SVG, "bar": BAR_SVG})
    deployment = make_deployment()

    build_iconfont(deployment)

    assert validate_deployment(deployment)


def test_validate_detects_missing_rule(source_dir, make_deployment):
    """Test validation fails when the stylesheet lacks a glyph rule."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment()
    build_iconfont(deployment)

    deployment.stylesheet_path.write_text("/* empty */\n", encoding="utf-8")

    assert not validate_deployment(deployment)


def test_clean_removes_outputs(source_dir, make_deployment):
    """Test clean removes fonts and stylesheet but keeps sources."""
    write_svgs(source_dir, {"home": HOME_SVG})
    deployment = make_deployment()
    build_iconfont(deployment)

    assert clean(deployment) == 5
    assert not any(path.exists() for path in deployment.font_files())
    assert not deployment.stylesheet_path.exists()
    assert [p.name for p in source_dir.iterdir()] == ["uEA01-home.svg"]
    assert clean(deployment) == 0
