"""Test configuration and fixtures for svgtextbox_toolkit tests.

Provides sample documents for the textbox passes and the fragment pass, and
isolates every test from user configuration overrides.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

lxml = pytest.importorskip("lxml")
from lxml import etree as ET

from svgtextbox_toolkit.config import ConfigManager
from svgtextbox_toolkit.core.utils import parse_document

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

TEXTBOX_DOCUMENT = b"""<svg width="200" height="400" xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink">
  <rect x="0" y="0" width="10" height="10"/>
  <textbox x="0" y="0" width="200" height="200">
    <markup>
      Hello World
    </markup>
  </textbox>
  <!-- second box -->
  <textbox x="0" y="200" width="200" height="200" padding-top="10" style="fill:red;">
    <markup>
      <span style="italic">Hello</span><preserved-space/>World
      <br/><divider/><br/>
      Newline
    </markup>
  </textbox>
</svg>"""

FRAGMENT_DOCUMENT = b"""<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="100" height="50">
  <defs>
    <g>
      <symbol overflow="visible" id="glyph0-1"><path d="M 1 1"/></symbol>
    </g>
  </defs>
  <g id="surface5">
    <use xlink:href="#glyph0-1" x="10" y="20"/>
  </g>
  <g id="other"/>
  <?svgtextbox-prefix textbox-0?>
  <?svgtextbox-x_offset 10 ?>
  <?svgtextbox-y_offset  20 ?>
</svg>"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point user overrides at an empty directory and reload configuration."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SVGTEXTBOX_CONFIG_DIR", str(config_dir))
    ConfigManager.reset()
    yield config_dir
    ConfigManager.reset()


@pytest.fixture
def textbox_document():
    return TEXTBOX_DOCUMENT


@pytest.fixture
def fragment_document():
    return FRAGMENT_DOCUMENT


@pytest.fixture
def textbox_tree(textbox_document):
    return parse_document(textbox_document)


@pytest.fixture
def fragment_tree(fragment_document):
    return parse_document(fragment_document)


@pytest.fixture
def make_tree():
    """Build a tree from an SVG body snippet (default namespace already declared)."""
    def _make(body: str) -> ET._ElementTree:
        return parse_document(
            f'<svg xmlns="{SVG_NS}" xmlns:xlink="{XLINK_NS}">{body}</svg>'.encode("utf-8")
        )
    return _make
