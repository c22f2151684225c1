from __future__ import annotations

import html
from dataclasses import dataclass

ACTION_SUBMIT = "submit_log"
ACTION_CANCEL = "cancel"
ACTION_SAVE_LOG = "save_full_log"

PROMPT_HEADING = "What changed in this version?"
PROMPT_PLACEHOLDER = "- Added roof details\n- Fixed layer organization"


@dataclass(frozen=True)
class PromptView:
    heading: str = PROMPT_HEADING
    placeholder: str = PROMPT_PLACEHOLDER
    skip_label: str = "Skip"
    submit_label: str = "Log Change"


@dataclass(frozen=True)
class ViewerView:
    document_name: str
    content: str
    save_label: str = "Save Edits"

    @property
    def heading(self) -> str:
        return f"Project History ({self.document_name})"


def escape_script_text(text: str) -> str:
    """
    Make text safe to place inside a JavaScript template literal in a <script>.

    Every "<" becomes \\x3C so the HTML parser never sees a tag, comment or
    "</script>" in the content; the literal still evaluates back to "<".
    """
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("$", "\\$")
        .replace("<", "\\x3C")
    )


def _attr(text: str) -> str:
    # Newlines in attributes survive as character references.
    return html.escape(text, quote=True).replace("\n", "&#10;")


def render_prompt(view: PromptView) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: sans-serif; padding: 10px; }}
    textarea {{ width: 100%; height: 150px; margin-bottom: 10px; box-sizing: border-box; }}
    button {{ padding: 8px 15px; cursor: pointer; background: #0078d7; color: white; border: none; border-radius: 3px; }}
    button:hover {{ background: #005a9e; }}
    .cancel {{ background: #ddd; color: #333; margin-right: 10px; }}
    .cancel:hover {{ background: #ccc; }}
  </style>
</head>
<body>
  <h3>{html.escape(view.heading)}</h3>
  <textarea id="msg" placeholder="{_attr(view.placeholder)}"></textarea>
  <div style="text-align: right;">
    <button class="cancel" onclick="savelogCall('{ACTION_CANCEL}', '')">{html.escape(view.skip_label)}</button>
    <button onclick="submitLog()">{html.escape(view.submit_label)}</button>
  </div>
  <script>
    function submitLog() {{
      var txt = document.getElementById('msg').value;
      savelogCall('{ACTION_SUBMIT}', txt);
    }}
  </script>
</body>
</html>
"""


def render_viewer(view: ViewerView) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: monospace; padding: 10px; display: flex; flex-direction: column; height: 90vh; }}
    textarea {{ flex: 1; width: 100%; box-sizing: border-box; padding: 10px; font-family: monospace; }}
    button {{ margin-top: 10px; padding: 10px; background: #28a745; color: white; border: none; cursor: pointer; align-self: flex-end; }}
  </style>
</head>
<body>
  <h3>{html.escape(view.heading)}</h3>
  <textarea id="full_log"></textarea>
  <button onclick="saveChanges()">{html.escape(view.save_label)}</button>
  <script>
    document.getElementById('full_log').value = `{escape_script_text(view.content)}`;
    function saveChanges() {{
      var txt = document.getElementById('full_log').value;
      savelogCall('{ACTION_SAVE_LOG}', txt);
    }}
  </script>
</body>
</html>
"""
