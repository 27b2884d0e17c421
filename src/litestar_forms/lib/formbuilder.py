# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from litestar_forms.config.app import logger

from .element import random_token
from .group import Group


class Form(Group):
    """
    The root of a form.

    The `method` and `action` options are moved to the attributes; the
    method defaults to post.
    """

    _tag = "form"

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        attr: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        options = dict(options or {})
        attr = dict(attr or {})

        for key in ("method", "action"):
            value = options.pop(key, None)
            if value is not None:
                attr[key] = value
        if attr.get("method") is None:
            attr["method"] = "post"

        super().__init__(options, attr, **kwargs)

    def get_id(self) -> str | None:
        ident = self.options.get("id")
        if ident is False:
            return None

        if ident is None:
            name = self.options.get("name")
            ident = f"{name}-form" if name else random_token()
            self.options["id"] = ident

        return str(ident)

    def is_submitted(
        self, method: str, data: Mapping[str, Any] | None = None, apply: bool = True
    ) -> bool:
        """
        Check if the form was submitted with the request method.

        :param method: the HTTP method of the request
        :param data: submitted values, applied to the controls if apply is set
        """
        if method.lower() != (self.get_attr("method") or "").lower():
            return False

        logger.info("Form %s submitted with %s", self.get_id(), method.upper())
        if apply and data is not None:
            self.set_values(data)

        return True


class FormView(Form, ABC):
    """
    Base class for forms built in a subclass.

    Subclasses set `form_options` and `form_attr`, and add the form fields in
    build_form(). Elements of the form use the view as builder, so a type
    ":name" given to add() calls the build_name() method of the view, and
    `custom_types` of the view apply to all elements of the form.
    """

    form_options: dict[str, Any] = {}
    form_attr: dict[str, Any] = {}

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(self.form_options, self.form_attr, **kwargs)
        self.build_form()

    @abstractmethod
    def build_form(self) -> None:
        pass


# EOF
