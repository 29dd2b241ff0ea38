from __future__ import annotations

import pytest

from slicenshare_api.settings import Settings
from tests.helpers import make_settings


@pytest.fixture
def public_dir(tmp_path):
    directory = tmp_path / "public"
    directory.mkdir()
    (directory / "styles.css").write_text("body { margin: 0; }\n")
    (directory / "app.js").write_text("console.log('slice');\n")
    return directory


@pytest.fixture
def prod_settings(public_dir) -> Settings:
    return make_settings(public_dir, environment="production")


@pytest.fixture
def dev_settings(public_dir) -> Settings:
    return make_settings(public_dir, environment="development")
