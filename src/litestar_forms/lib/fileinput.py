# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import base64
import glob
import re
import shutil
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from litestar_forms.config.app import logger
from litestar_forms.config.defaults import UploadError

from . import coretags as t
from .forminputs import Control


@dataclass
class UploadedFile:
    """A file received with a multipart request, stored in a temporary file."""

    name: str
    type: str = "application/octet-stream"
    size: int = 0
    tmp_name: str = ""
    error: int = UploadError.OK

    def to_token(self) -> str:
        """Token to restore the upload from a hidden field on a later submit."""
        return f"^;{self.name};{self.type};{self.size};{Path(self.tmp_name).name};{int(self.error)}"

    @classmethod
    def from_token(cls, token: str, tmp_dir: str | Path) -> UploadedFile | None:
        name, mime, size, tmp_ref, error = token[2:].rsplit(";", 4)
        tmp_name = Path(tmp_dir) / Path(tmp_ref).name

        if not tmp_name.is_file():
            logger.warning("'%s' is not an uploaded file", tmp_name)
            return None

        return cls(name, mime, int(size or 0), str(tmp_name), int(error or 0))


def expand_braces(pattern: str) -> list[str]:
    """Expand {a,b} alternatives in a glob pattern."""
    match = re.search(r"\{([^{}]*)\}", pattern)
    if match is None:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    return [
        expanded
        for alternative in match.group(1).split(",")
        for expanded in expand_braces(head + alternative + tail)
    ]


class FileInput(Control):
    """
    File upload control, rendered for the Jasny Bootstrap fileinput widget.

    The value is an UploadedFile, a string with the name of an earlier
    stored file, "" when the file was removed, or None. An upload is kept
    in a hidden field, so a form that fails validation does not need to be
    uploaded again.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(options, attr, **kwargs)
        self.attr.set("value", None)
        self.add_class(["fileinput", "fileinput-new"])

    def get_tmp_dir(self) -> str:
        return self.get_option("upload-tmp-dir") or tempfile.gettempdir()

    def pick_value(self, values: list[Any]) -> Any:
        """The value of a field sent more than once: a new upload, or else the hidden field."""
        for value in values:
            if isinstance(value, UploadedFile) and value.error != UploadError.NO_FILE:
                return value
        strings = [value for value in values if isinstance(value, str)]
        return strings[0] if strings else next(iter(values), None)

    def set_value(self, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            value = self.pick_value(list(value))

        if isinstance(value, str) and value.startswith("^;"):
            value = UploadedFile.from_token(value, self.get_tmp_dir())

        if isinstance(value, UploadedFile) and value.error == UploadError.NO_FILE:
            return self.value

        value = super().set_value(value)

        if not value or (isinstance(value, UploadedFile) and value.error):
            self.remove_class("fileinput-exists").add_class("fileinput-new")
        else:
            self.remove_class("fileinput-new").add_class("fileinput-exists")

        return value

    def is_uploaded(self) -> bool:
        return isinstance(self.value, UploadedFile)

    def is_cleared(self) -> bool:
        return self.value == ""

    def move_uploaded_file(self, destination: str | Path) -> Path | None:
        """
        Move the uploaded file to destination.

        Existing files matching destination, a glob pattern which may use
        {a,b} alternatives, are removed first; also when the file was
        cleared. A directory destination keeps the name of the upload, for a
        file destination the extension of the upload is used.

        :return: the path of the moved file, or None if there is no upload
        """
        if not self.is_uploaded() and not self.is_cleared():
            return None

        for pattern in expand_braces(str(destination)):
            for file in glob.glob(pattern):
                if Path(file).is_file():
                    Path(file).unlink()

        if self.is_cleared():
            return None

        target = Path(destination)
        upload_name = Path(self.value.name).name
        if target.is_dir():
            target = target / upload_name
        else:
            target = target.with_name(target.stem + Path(upload_name).suffix)

        target.parent.mkdir(mode=0o775, parents=True, exist_ok=True)
        shutil.move(self.value.tmp_name, target)
        logger.info("Moved uploaded file %s to %s", upload_name, target)

        return target

    def validate(self) -> bool:
        if self.get_option("basic-validation") is False:
            return True
        return self.validate_required() and self.validate_upload()

    def render_hidden(self) -> str:
        if not self.is_uploaded() or self.value.error:
            return ""
        return (
            f'<input type="hidden" name="{t.escape_text(self.get_field_name())}" '
            f'value="{t.escape_text(self.value.to_token())}">\n'
        )

    def render_preview(self) -> str:
        if isinstance(self.value, UploadedFile):
            filename = "" if self.value.error else t.escape_text(Path(self.value.name).name)
        else:
            filename = t.escape_text(Path(self.value).name) if self.value else ""

        return (
            '<i class="icon-file fileinput-exists"></i> '
            f'<span class="fileinput-preview">{filename}</span>'
        )

    def render_select_button(self) -> str:
        attrs = self.attr.render_only(["name", "multiple"])
        select = t.escape_text(self.get_option("select-button") or "Select")
        change = t.escape_text(self.get_option("change-button") or "Change")
        return (
            '<span class="btn btn-default btn-file">'
            f'<span class="fileinput-new">{select}</span>'
            f'<span class="fileinput-exists">{change}</span>'
            f'<input type="file" {attrs}></span>'
        )

    def render_remove_button(self) -> str:
        remove = self.get_option("remove-button")
        if remove is False:
            return ""
        return (
            '<button class="btn btn-default fileinput-exists" data-dismiss="fileinput">'
            f"{t.escape_text(remove or 'Remove')}</button>"
        )

    def render_element(self) -> str:
        attrs = self.attr.render({"name": None, "multiple": None})
        return (
            f'<div {attrs} data-provides="fileinput">\n'
            f'  {self.render_hidden()}<div class="input-append">\n'
            f'    <div class="uneditable-input span3">{self.render_preview()}</div>'
            f"{self.render_select_button()}{self.render_remove_button()}\n"
            "  </div>\n"
            "</div>"
        )


class ImageInput(FileInput):
    """Image upload control, previewing the uploaded image inline."""

    def create_inline_image(self, upload: UploadedFile) -> str:
        data = base64.encodebytes(Path(upload.tmp_name).read_bytes()).decode("ascii")
        return f'<img src="data:{t.escape_text(upload.type)};base64,\n{data}">'

    def render_preview(self) -> str:
        if isinstance(self.value, UploadedFile):
            image = "" if self.value.error else self.create_inline_image(self.value)
        elif self.value:
            image = f'<img src="{t.escape_text(self.value)}">'
        else:
            image = ""

        holder = self.get_option("holder")
        if holder:
            return (
                f'<div class="fileinput-new thumbnail" data-trigger="fileinput">{holder}</div>\n'
                f'<div class="fileinput-exists fileinput-preview thumbnail">{image}</div>'
            )
        return f'<div class="fileinput-preview thumbnail" data-trigger="fileinput">{image}</div>'

    def render_element(self) -> str:
        attrs = self.attr.render({"name": None})
        return (
            f'<div {attrs} data-provides="fileinput">\n'
            f"  {self.render_hidden()}{self.render_preview()}\n"
            "  <div>\n"
            f"    {self.render_select_button()}\n"
            f"    {self.render_remove_button()}\n"
            "  </div>\n"
            "</div>"
        )


# EOF
