# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

# binding of submitted request data to forms

import tempfile
from collections.abc import Iterable
from typing import Any

from litestar import Request
from litestar.datastructures import UploadFile

from litestar_forms.config.defaults import UploadError

from .fileinput import UploadedFile
from .formbuilder import Form


async def spool_upload(upload: UploadFile, tmp_dir: str | None = None) -> UploadedFile:
    """Store an uploaded file in the upload directory."""
    if not upload.filename:
        return UploadedFile("", error=UploadError.NO_FILE)

    content = await upload.read()
    with tempfile.NamedTemporaryFile(dir=tmp_dir, prefix="upload-", delete=False) as tmp:
        tmp.write(content)

    return UploadedFile(
        name=upload.filename,
        type=upload.content_type,
        size=len(content),
        tmp_name=tmp.name,
    )


def prefer_uploads(vals: list[Any]) -> list[Any]:
    """
    Values of a file field that also carries the hidden token of an earlier
    upload: a new upload replaces the token, an empty file part is dropped.
    """
    uploads = [val for val in vals if isinstance(val, UploadedFile)]
    if not uploads or len(uploads) == len(vals):
        return vals

    sent = [val for val in uploads if val.error != UploadError.NO_FILE]
    return sent or [val for val in vals if not isinstance(val, UploadedFile)]


def collapse_items(items: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """
    Convert submitted (key, value) pairs to a dict of values.

    Keys ending with [] and keys sent more than once give a list. An empty
    string sent before the other values of a key, the hidden fallback of
    checkboxes, is dropped. Uploaded files win over strings sent with the
    same key.
    """
    collected: dict[str, list[Any]] = {}
    list_keys = set()

    for key, value in items:
        if key.endswith("[]"):
            key = key[:-2]
            list_keys.add(key)
        collected.setdefault(key, []).append(value)

    values: dict[str, Any] = {}
    for key, vals in collected.items():
        vals = prefer_uploads(vals)
        if len(vals) > 1 and vals[0] == "":
            vals = vals[1:]
        if key in list_keys:
            values[key] = [val for val in vals if val != ""]
        elif len(vals) > 1:
            values[key] = vals
        else:
            values[key] = vals[0]

    return values


async def form_values(request: Request, tmp_dir: str | None = None) -> dict[str, Any]:
    """
    Values submitted with the request: the query parameters for GET, the
    form body otherwise. Uploaded files are stored in tmp_dir.
    """
    if request.method.upper() == "GET":
        return collapse_items(request.query_params.multi_items())

    form_data = await request.form()
    items = []
    for key, value in form_data.multi_items():
        if isinstance(value, UploadFile):
            value = await spool_upload(value, tmp_dir)
        items.append((key, value))

    return collapse_items(items)


async def submit(form: Form, request: Request, apply: bool = True) -> bool:
    """Check if the form is submitted with the request, applying the values."""
    if request.method.lower() != (form.get_attr("method") or "").lower():
        return False

    data = await form_values(request, form.get_option("upload-tmp-dir")) if apply else None
    return form.is_submitted(request.method, data, apply)


# EOF
