"""Convert webhook models to and from JSON-compatible data.

Discord expects absent values to be left out of a payload, not to be
sent as `null`. The converter omits every attribute that still has its
default value, unless the attribute is marked with `ALWAYS_SEND`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, Final, TypeVar

import attrs
import cattrs
from cattrs.gen import make_dict_unstructure_fn, override

from discord_webhooks.exceptions import BadParseError

# attrs field metadata for values that are sent even when left at their default
ALWAYS_SEND: Final = {"always_send": True}

_logger = logging.getLogger(__name__)
_T = TypeVar("_T")


def _create_converter() -> cattrs.Converter:
    """Create and return the converter used for all webhook payloads.

    :return: A `cattrs.Converter` that omits unset optional values
    """
    converter = cattrs.Converter(omit_if_default=True)

    def unstructure_fn_factory(cls: type) -> Callable[[Any], dict[str, Any]]:
        overrides = {
            attribute.name: override(omit_if_default=False)
            for attribute in attrs.fields(cls)
            if attribute.metadata.get("always_send")
        }
        return make_dict_unstructure_fn(cls, converter, _cattrs_omit_if_default=True, **overrides)

    converter.register_unstructure_hook_factory(attrs.has, unstructure_fn_factory)
    return converter


converter = _create_converter()


def unstructure(instance: Any) -> dict[str, Any]:
    """Convert a model instance to a JSON-compatible dictionary."""
    return converter.unstructure(instance)


def structure(text: str, target_cls: type[_T], *, context: str) -> _T:
    """Convert a JSON response body to an instance of `target_cls`.

    Keys that are not part of the target class are ignored.

    :param text: The JSON text received from Discord
    :param target_cls: The model class to create
    :param context: A short description used in the error message
    :return: An instance of the target class
    :raises BadParseError: If the text is not valid JSON or does not
      match the schema of the target class
    """
    try:
        raw = json.loads(text)
        return converter.structure(raw, target_cls)
    except (ValueError, cattrs.BaseValidationError):
        _logger.debug("Failed to convert %s to %s", context, target_cls.__name__, exc_info=True)
        raise BadParseError(context=context) from None
