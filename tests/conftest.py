import pytest
from click.testing import CliRunner

MIT_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<SPDXLicenseCollection xmlns="http://www.spdx.org/license">
  <license isOsiApproved="true" licenseId="MIT" name="MIT License">
    <crossRefs>
      <crossRef>https://opensource.org/license/mit/</crossRef>
    </crossRefs>
    <text>
      <titleText>
        <p>MIT License</p>
      </titleText>
      <copyrightText>
        <p>Copyright (c) &lt;year&gt; &lt;copyright holders&gt;</p>
      </copyrightText>
      <p>The quick brown fox jumps over the lazy dog</p>
      <p>Permission is <b>hereby</b> granted</p>
    </text>
  </license>
</SPDXLicenseCollection>
"""

TITLE_BLOCK = "MIT License\n\n"
COPYRIGHT_BLOCK = "Copyright (c) <year> <copyright holders>\n\n"
BODY_WIDTH_10 = (
    "The quick\nbrown fox\njumps over\nthe lazy\ndog\n\n"
    "Permission\nis hereby\ngranted\n\n"
)


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def mit_xml() -> bytes:
    """A small SPDX license document."""
    return MIT_XML
