"""Common literal values used across zoe.

File and directory names live here so the builder, the scaffold and the tests
agree on the project layout.

Examples
--------
>>> from zoe import _constants
>>> _constants.SECTION_INDEX_FILENAME
'_index.md'
"""

VERSION = "0.1.0"

CONFIG_FILENAME = "zoe-config.json"
CONTENT_DIR = "content"
TEMPLATES_DIR = "templates"
DEFAULT_OUTPUT_DIR = "public"

MARKDOWN_SUFFIX = ".md"
HOMEPAGE_FILENAME = "index.md"
SECTION_INDEX_FILENAME = "_index.md"
INDEX_HTML = "index.html"
SITEMAP_FILENAME = "sitemap.xml"

IMAGES_DIR = "images"
STATIC_OUTPUT_DIR = "static"
HIGHLIGHT_CSS_PATH = "static/css/highlight.css"
