# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

"""Pytest fixtures for litestar-forms tests."""

import pytest

from litestar_forms.lib.formbuilder import Form
from litestar_forms.lib.registry import set_default_config


@pytest.fixture(autouse=True)
def reset_default_config():
    """Restore the built-in form config after each test."""
    yield
    set_default_config(None)


@pytest.fixture
def form():
    """An empty form with a fixed id."""
    return Form({"id": "form"})


@pytest.fixture
def upload_dir(tmp_path):
    """Directory for uploaded files, with one stored upload."""
    directory = tmp_path / "uploads"
    directory.mkdir()
    (directory / "upload-abc123").write_bytes(b"GIF89a")
    return directory


# EOF
