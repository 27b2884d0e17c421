# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from enum import IntEnum
from typing import Any


class UploadError(IntEnum):
    """Upload status codes, numbered as browsers' multipart handlers report them."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


UPLOAD_ERROR_MESSAGES: dict[int, str] = {
    UploadError.INI_SIZE: "The uploaded file exceeds the maximum upload size of the server.",
    UploadError.FORM_SIZE: "The uploaded file exceeds the maximum size that was specified in the HTML form.",
    UploadError.PARTIAL: "The uploaded file was only partially uploaded.",
    UploadError.NO_FILE: "No file was uploaded.",
    UploadError.NO_TMP_DIR: "Missing a temporary folder.",
    UploadError.CANT_WRITE: "Failed to write file to disk.",
    UploadError.EXTENSION: "A server extension stopped the file upload.",
}


DEFAULT_OPTIONS: dict[str, Any] = {
    "render": True,  # render element
    "validate": True,  # server-side validation
    "validation-script": True,  # <script> for rules HTML5 can't express
    "add-hidden": True,  # hidden input in front of checkboxes
    "required-suffix": " *",  # label suffix for required controls
    "container": "div",  # element type wrapping each control
    "label": True,  # True, False or "inside"
    "upload-tmp-dir": None,  # None means tempfile.gettempdir()
    "error:required": "Please fill out this field",
    "error:type": "Please enter a {{type}}",
    "error:min": "Value must be greater or equal to {{min}}",
    "error:max": "Value must be less or equal to {{max}}",
    "error:minlength": "Please use {{minlength}} characters or more for this text",
    "error:maxlength": "Please shorten this text to {{maxlength}} characters or less",
    "error:pattern": "Please match the requested format",
    "error:match": "Please match the value of {{other}}",
    "error:validation": "Please enter a valid value",
    "error:upload": UPLOAD_ERROR_MESSAGES,
}


# EOF
