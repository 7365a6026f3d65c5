"""Tests for markup to text conversion."""

from changelog_watcher.core.text import html_to_text, strip_html


def test_html_to_text_keeps_paragraphs() -> None:
    """Test block elements become blank-line separated paragraphs."""
    html = "<h2>2025.01.17</h2><p>First</p><ul><li>One</li><li>Two</li></ul>"

    assert html_to_text(html) == "2025.01.17\n\nFirst\n\nOne\n\nTwo"


def test_html_to_text_line_breaks() -> None:
    """Test <br> becomes a single line break."""
    assert html_to_text("<p>Line one<br>Line two<br/>Line three</p>") == "Line one\nLine two\nLine three"


def test_html_to_text_removes_script_and_style() -> None:
    """Test script and style contents are dropped regardless of attributes."""
    html = (
        '<p>Keep</p>'
        '<script type="text/javascript" async>var x = "2025.01.17";</script>'
        '<style media="screen">p { color: red; }</style>'
    )

    assert html_to_text(html) == "Keep"


def test_html_to_text_decodes_entities() -> None:
    """Test common entities are decoded."""
    html = "<p>Tom &amp; Jerry &lt;3 &quot;hi&quot; it&#039;s&nbsp;here &gt; there</p>"

    assert html_to_text(html) == "Tom & Jerry <3 \"hi\" it's here > there"


def test_html_to_text_collapses_whitespace() -> None:
    """Test horizontal whitespace collapses and blank lines are capped at one."""
    html = "<div>\n   <p>  a    \t b  </p>\n\n\n\n   <p>c</p>\n</div>"

    assert html_to_text(html) == "a b\n\nc"


def test_html_to_text_malformed_markup() -> None:
    """Test malformed markup does not raise."""
    text = html_to_text("<div><p>Unclosed <b>bold</div></span><p")

    assert "Unclosed bold" in text


def test_html_to_text_plain_text() -> None:
    """Test text without markup passes through."""
    assert html_to_text("  just text  ") == "just text"


def test_strip_html_removes_tags() -> None:
    """Test tags are removed."""
    assert strip_html("<p>Hello <strong>world</strong></p>") == "Hello world"


def test_strip_html_decodes_entities() -> None:
    """Test entity decoding in the single-line variant."""
    assert strip_html("Tom &amp; Jerry") == "Tom & Jerry"
    assert strip_html("a &lt; b") == "a < b"
    assert strip_html("Say &quot;hello&quot;") == 'Say "hello"'
    assert strip_html("It&#039;s fine") == "It's fine"
    assert strip_html("hello&nbsp;world") == "hello world"


def test_strip_html_single_line() -> None:
    """Test paragraphs are joined into one line."""
    html = "<div class='test'><p>Hello &amp; <em>world</em>!</p>\n<p>Again</p></div>"

    assert strip_html(html) == "Hello & world ! Again"


def test_strip_html_trims() -> None:
    """Test leading and trailing whitespace is trimmed."""
    assert strip_html("  hello    world  ") == "hello world"
