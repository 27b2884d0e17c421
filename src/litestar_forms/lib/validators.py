# SPDX-FileCopyrightText: 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

__copyright__ = "(C) 2025 Hidayat Trimarsanto <trimarsanto@gmail.com>"
__author__ = "trimarsanto@gmail.com"
__license__ = "MPL-2.0"

import json
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .capabilities import HasValidationScript, HasValue
from .element import PLACEHOLDER
from .exceptions import StructureError
from .group import Group


_NUMERIC = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _strptime(value: str, *formats: str) -> bool:
    for fmt in formats:
        try:
            datetime.strptime(value, fmt)
        except ValueError:
            continue
        return True
    return False


def is_color(value: Any) -> bool:
    return re.fullmatch(r"#[0-9a-fA-F]{6}", str(value)) is not None


def is_number(value: Any) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    return re.fullmatch(r"[0-9]+", str(value)) is not None


def is_numeric(value: Any) -> bool:
    return as_number(value) is not None


def is_date(value: Any) -> bool:
    if isinstance(value, date):
        return True
    return _strptime(str(value), "%Y-%m-%d")


def is_datetime(value: Any) -> bool:
    if isinstance(value, datetime):
        return True
    return _strptime(str(value), "%Y-%m-%dT%H:%M:%S")


def is_datetime_local(value: Any) -> bool:
    if isinstance(value, datetime):
        return True
    return _strptime(str(value), "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S")


def is_time(value: Any) -> bool:
    if isinstance(value, time):
        return True
    return _strptime(str(value), "%H:%M", "%H:%M:%S")


def is_month(value: Any) -> bool:
    return re.fullmatch(r"\d{4}-\d{2}", str(value)) is not None and _strptime(
        str(value), "%Y-%m"
    )


def is_week(value: Any) -> bool:
    match = re.fullmatch(r"\d{4}-W(\d{2})", str(value))
    return match is not None and 1 <= int(match.group(1)) <= 53


def is_url(value: Any) -> bool:
    return re.match(r"[A-Za-z]+:", str(value)) is not None


def is_email(value: Any) -> bool:
    return re.search(r"^[\w\-\.]+@[\w\-\.]+\w+$", str(value)) is not None


# input type -> format check
TYPE_VALIDATORS: dict[str, Callable[[Any], bool]] = {
    "color": is_color,
    "number": is_number,
    "range": is_numeric,
    "date": is_date,
    "datetime": is_datetime,
    "datetime-local": is_datetime_local,
    "time": is_time,
    "month": is_month,
    "week": is_week,
    "url": is_url,
    "email": is_email,
}


def as_number(value: Any) -> int | float | Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str) and _NUMERIC.fullmatch(value.strip()):
        return float(value)
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def compare(value: Any, other: Any) -> int:
    """Compare as numbers if both are numeric, otherwise as (ISO) strings."""
    left, right = as_number(value), as_number(other)
    if left is None or right is None:
        left, right = _as_text(value), _as_text(other)
    return (left > right) - (left < right)


def is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


def _js_string(text: str) -> str:
    return json.dumps(text)[1:-1].replace("</", "<\\/")


class BasicValidation(HasValidationScript):
    """
    Validation rules for controls.

    Each rule checks one option of the control against its value. A failing
    rule sets the error message of the control from the `error:<rule>`
    option and returns False.
    """

    def validate_required(self) -> bool:
        if self.get_option("required") and is_empty(self.get_value()):
            self.set_error(self.get_option("error:required"))
            return False
        return True

    def validate_min_max(self) -> bool:
        value = self.get_value()

        minimum = self.get_option("min")
        if minimum is not None and minimum is not False and compare(value, minimum) < 0:
            self.set_error(self.get_option("error:min"))
            return False

        maximum = self.get_option("max")
        if maximum is not None and maximum is not False and compare(value, maximum) > 0:
            self.set_error(self.get_option("error:max"))
            return False

        return True

    def validate_length(self) -> bool:
        length = len(str(self.get_value()))

        minlength = self.get_option("minlength") or self.get_option("data-minlength")
        if minlength and length < int(minlength):
            self.set_error(self.get_option("error:minlength"))
            return False

        maxlength = self.get_option("maxlength")
        if maxlength and length > int(maxlength):
            self.set_error(self.get_option("error:maxlength"))
            return False

        return True

    def validate_pattern(self) -> bool:
        pattern = self.get_option("pattern")
        if pattern and re.fullmatch(pattern, str(self.get_value())) is None:
            self.set_error(self.get_option("error:pattern"))
            return False
        return True

    def validate_match(self) -> bool:
        other = self.get_match_control()
        if other is None:
            return True

        if self.get_value() != other.get_value():
            self.set_error(self.get_match_message())
            return False

        return True

    def validate_upload(self) -> bool:
        error = getattr(self.get_value(), "error", 0)
        if not error:
            return True

        messages: Mapping[int, str] = self.get_option("error:upload") or {}
        self.set_error(messages.get(error, f"Upload failed with error code {int(error)}."))
        return False

    def validate_type(self) -> bool:
        check = TYPE_VALIDATORS.get(self.get_attr("type") or "")
        if check is None or check(self.get_value()):
            return True

        self.set_error(self.get_option("error:type"))
        return False

    def get_match_control(self) -> HasValue | None:
        """The control this control must match, from the `match` option."""
        other = self.get_option("match")
        if other is None or other is False:
            return None
        if isinstance(other, HasValue):
            return other

        root = self.get_form()
        if root is None:
            root = self
            while root.get_parent() is not None:
                root = root.get_parent()

        control = root.get(other) if isinstance(root, Group) else None
        if control is None:
            raise StructureError(f"Unable to find control `{other}` to match.")
        return control

    def get_match_message(self) -> str:
        return self.get_option("error:match") or self.get_option("error:same")

    # client side

    def get_validation_script(self) -> str:
        """
        Return a <script> enforcing the rules HTML5 attributes can't express,
        minlength and match, or an empty string.
        """
        if not self.get_option("validation-script"):
            return ""

        rules = self.get_validation_script_rules()
        if not rules:
            return ""

        for decorator in self.get_decorators():
            rules = decorator.apply_to_validation_script(self, rules)

        return self.generate_validation_script(rules)

    def get_validation_script_rules(self) -> dict[str, str]:
        rules = {}

        minlength = self.get_option("minlength")
        if minlength:
            rules["minlength"] = f"this.value.length >= {int(minlength)}"

        other = self.get_match_control()
        if other is not None:
            rules["match"] = (
                f"this.value == document.getElementById({json.dumps(other.get_id())}).value"
            )

        return rules

    def generate_validation_script(self, rules: dict[str, str]) -> str:
        checks = []
        for test, rule in rules.items():
            message = (
                self.get_match_message() if test == "match" else self.get_option(f"error:{test}")
            )
            checks.append(
                f"if (!({rule})) {{\n"
                f'            this.setCustomValidity("{self.parse_for_script(message)}");\n'
                f"            return;\n"
                f"        }}"
            )

        body = "\n        ".join(checks)
        return (
            '<script type="text/javascript">\n'
            f'    document.getElementById({json.dumps(self.get_id())}).addEventListener("input", function() {{\n'
            f"        {body}\n"
            f'        this.setCustomValidity("");\n'
            f"    }});\n"
            "</script>"
        )

    def parse_for_script(self, message: str | None) -> str:
        """Message as the content of a JavaScript string literal."""
        message = message or ""
        parts = []
        pos = 0

        for match in PLACEHOLDER.finditer(message):
            parts.append(_js_string(message[pos : match.start()]))
            parts.append(self.resolve_placeholder_for_script(match.group(1)))
            pos = match.end()

        parts.append(_js_string(message[pos:]))
        return "".join(parts)

    def resolve_placeholder_for_script(self, var: str) -> str:
        if var == "value":
            return '" + this.value + "'
        if var == "length":
            return '" + this.value.length + "'
        return _js_string(self.resolve_placeholder(var))


# EOF
