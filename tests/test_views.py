from savelog.core.views import (
    ACTION_CANCEL,
    ACTION_SAVE_LOG,
    ACTION_SUBMIT,
    PromptView,
    ViewerView,
    escape_script_text,
    render_prompt,
    render_viewer,
)


def test_escape_script_text_handles_template_literal_syntax() -> None:
    assert escape_script_text("a\\b") == "a\\\\b"
    assert escape_script_text("`x`") == "\\`x\\`"
    assert escape_script_text("${evil}") == "\\${evil}"
    assert escape_script_text("</script>") == "\\x3C/script>"
    assert escape_script_text("a < b") == "a \\x3C b"
    assert escape_script_text("plain text\nnext") == "plain text\nnext"


def test_prompt_page_wires_both_actions() -> None:
    page = render_prompt(PromptView())
    assert "What changed in this version?" in page
    assert f"savelogCall('{ACTION_CANCEL}'" in page
    assert f"savelogCall('{ACTION_SUBMIT}', txt)" in page
    assert ">Skip</button>" in page
    assert ">Log Change</button>" in page
    assert 'placeholder="- Added roof details&#10;- Fixed layer organization"' in page


def test_viewer_page_escapes_content_and_title() -> None:
    view = ViewerView(document_name="<b>house</b>.skp", content="cost: $5 `quoted` \\path")
    page = render_viewer(view)
    assert "Project History (&lt;b&gt;house&lt;/b&gt;.skp)" in page
    assert "`cost: \\$5 \\`quoted\\` \\\\path`" in page
    assert f"savelogCall('{ACTION_SAVE_LOG}', txt)" in page
    assert ">Save Edits</button>" in page


def test_viewer_render_is_stable() -> None:
    view = ViewerView(document_name="house.skp", content="\n[2024-01-01 00:00:00] entry")
    assert render_viewer(view) == render_viewer(view)


def test_viewer_content_cannot_open_markup_inside_script() -> None:
    content = "note: <!--<script> pasted\n</script><b>x</b>"
    page = render_viewer(ViewerView(document_name="house.skp", content=content))
    script_start = page.index("<script>")
    script_end = page.index("</script>")
    script = page[script_start + len("<script>"):script_end]
    assert "<" not in script
    assert "`note: \\x3C!--\\x3Cscript> pasted\n\\x3C/script>\\x3Cb>x\\x3C/b>`" in script
    assert "function saveChanges()" in script
    assert page.count("<script>") == 1
    assert page.count("</script>") == 1
    assert page.rstrip().endswith("</body>\n</html>")
