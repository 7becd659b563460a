APP_ORG = "MarkdownSource"
APP_NAME = "Markdown Source"

# ---- Settings store keys ----
KEY_MARKDOWN_SOURCE = "markdown/source"
KEY_MARKDOWN_TEXT = "markdown/text"
KEY_MARKDOWN_PATH = "markdown/path"
KEY_MARKDOWN_FILE_TEXT = "markdown/file_text"

KEY_STYLE_SOURCE = "style/source"
KEY_CSS_TEXT = "style/css"
KEY_CSS_PATH = "style/path"
KEY_CSS_FILE_TEXT = "style/file_text"
KEY_BACKGROUND = "style/background"
KEY_FOREGROUND = "style/foreground"

KEY_FONT_FACE = "font/face"
KEY_FONT_STYLE = "font/style"
KEY_FONT_SIZE = "font/size"

KEY_WIDTH = "surface/width"
KEY_HEIGHT = "surface/height"
KEY_POLL_INTERVAL = "watch/interval_ms"

# ---- Defaults ----
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600
DEFAULT_POLL_INTERVAL_MS = 1000
DEFAULT_BACKGROUND = 0x00000000
DEFAULT_FOREGROUND = 0xFFFFFFFF

DEFAULT_CSS = """body {
\tbackground-color: rgba(0, 0, 0, 0);
\tmargin: 0px 0px;
\toverflow: hidden;
}"""

# ---- Bootstrap / wire contract ----
EVENT_SET_HTML = "setMarkdownHtml"
EVENT_SET_CSS = "setMarkdownCss"
STYLE_ELEMENT_ID = "markdownSourceStyle"
DATA_URI_MIME = "text/html"

BOOTSTRAP_SCRIPT = f"""
window.addEventListener('{EVENT_SET_HTML}', function (event) {{
  document.body.innerHTML = event.detail.html;
}});
window.addEventListener('{EVENT_SET_CSS}', function (event) {{
  var style = document.getElementById('{STYLE_ELEMENT_ID}');
  if (!style) {{
    style = document.createElement('style');
    style.id = '{STYLE_ELEMENT_ID}';
    document.head.appendChild(style);
  }}
  style.textContent = event.detail.css;
}});
"""

HTML_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="UTF-8">
<script>{script}</script>
</head>
<body>{body}</body>
</html>
"""
