"""
Embed Templates -- Copy-Paste Snippet Tests

The snippet is pasted into third-party pages. Every option toggles exactly
one piece of markup, and the optional code listing is always escaped.
"""

from engine.kernel.embed import PLACEHOLDER_SRC, embed_src, escape_code, render_embed_snippet
from engine.kernel.sketch import EmbedOptions

# ============================================================================
# Defaults
# ============================================================================


def test_default_options(sketch):
    code = render_embed_snippet(sketch)
    assert code.startswith('<div class="p5-sketch-container" style="width: 100%; height: 400px;">')
    assert f'src="{PLACEHOLDER_SRC}"' in code
    assert 'style="width: 100%; height: 100%; border: none;"' in code
    assert "data-autoplay" not in code
    assert "<details>" not in code
    assert "@media (max-width: 600px)" in code
    assert code.endswith("</style>")


def test_custom_src(sketch):
    code = render_embed_snippet(sketch, src="https://host/embed/abc")
    assert 'src="https://host/embed/abc"' in code
    assert PLACEHOLDER_SRC not in code


# ============================================================================
# Options
# ============================================================================


def test_width_and_height(sketch):
    code = render_embed_snippet(sketch, EmbedOptions(width="640px", height="50vh"))
    assert 'style="width: 640px; height: 50vh;"' in code


def test_size_values_are_attribute_escaped(sketch):
    code = render_embed_snippet(sketch, EmbedOptions(width='10px" onload="x'))
    assert 'onload="x' not in code
    assert "10px&quot; onload=&quot;x" in code


def test_show_code_lists_escaped_source(sketch):
    code = render_embed_snippet(sketch, EmbedOptions(show_code=True))
    assert "<summary>View Code</summary>" in code
    assert f"<pre><code>{escape_code(sketch.js)}</code></pre>" in code
    assert "mouseX &lt; 50 &amp;&amp; mouseY &gt; 10" in code
    assert "mouseX < 50" not in code


def test_not_responsive_has_no_style(sketch):
    code = render_embed_snippet(sketch, EmbedOptions(responsive=False))
    assert "<style>" not in code
    assert code.endswith("</div>")


def test_autoplay_off(sketch):
    code = render_embed_snippet(sketch, EmbedOptions(autoplay=False))
    assert 'data-autoplay="false"' in code


def test_options_do_not_leak_into_each_other(sketch):
    plain = render_embed_snippet(sketch, EmbedOptions(responsive=False))
    with_code = render_embed_snippet(sketch, EmbedOptions(responsive=False, show_code=True))
    assert with_code.startswith(plain.removesuffix("</div>"))


# ============================================================================
# Helpers
# ============================================================================


def test_escape_code_leaves_quotes():
    assert escape_code("a < b && \"c\" > 'd'") == "a &lt; b &amp;&amp; \"c\" &gt; 'd'"


def test_embed_src():
    assert embed_src("http://test/", "abc") == "http://test/embed/abc"
    assert embed_src("http://test", "abc", show_code=True) == "http://test/embed/abc?showCode=true"
