# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

from litestar import Request, Response, MediaType
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from litestar_forms.config.app import logger


class FormBuilderError(Exception):
    """Base class for errors caused by building a form the wrong way."""


class UnknownTypeError(FormBuilderError, TypeError):

    def __init__(self, kind: str, type_name: str):
        """
        :param kind: either "element", "decorator" or "field"
        :param type_name: the name that could not be resolved
        """
        super().__init__(f"Unknown {kind} type `{type_name}`.")
        self.kind = kind
        self.type_name = type_name


class ElementRequiredError(FormBuilderError, TypeError):
    pass


class StructureError(FormBuilderError, ValueError):
    pass


class ConfigurationError(FormBuilderError, ValueError):
    pass


def form_error_handler(request: Request, exc: FormBuilderError) -> Response:
    """Abort the response instead of sending half-built HTML."""

    logger.error("Form building failed for %s: %s", request.url, exc)

    return Response(
        content=f"Form error: {exc}",
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=MediaType.TEXT,
    )


# EOF
