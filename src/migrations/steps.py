# SPDX-License-Identifier: MIT
"""Historical environment migration steps.

Each function upgrades an environment document from the schema of one release
to the next. Steps mutate the document in place and check for the shape they
introduce before writing, so replaying a step on an already-upgraded document
leaves it unchanged (step 7 is the exception: it always issues new response
identifiers).

Several steps fill a field when the existing value is *falsy* rather than
*absent*. Documents written by those releases depend on that behaviour, so the
checks are kept as they shipped. They use :func:`_is_truthy`, which follows the
truthiness rules of the application that produced the documents: empty lists
and objects are truthy, ``""``, ``0``, ``NaN``, ``False`` and ``null`` are not.
"""

from __future__ import annotations

import math
import re
from typing import Any, Iterator, MutableMapping

from utils.identifiers import new_uuid

from .errors import MalformedDocumentError
from .registry import Document, MigrationStep

_INT_PREFIX = re.compile(r"^\s*([+-]?[0-9]+)")


def _is_truthy(value: Any) -> bool:
    """Return ``True`` unless ``value`` is falsy for the document producer."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value != ""
    return True


def _parse_int(value: Any) -> int | None:
    """Parse the leading integer of ``value``.

    Mirrors the lenient parsing the documents were written with: ``"404"``
    and ``"404 Not Found"`` both yield ``404``. Values without a leading
    ASCII integer, or with more digits than an ``int`` can be built from,
    yield ``None`` (serialised as ``null``).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        return None


def _blank_header() -> dict[str, str]:
    return {"key": "", "value": ""}


def _routes(environment: Document) -> Iterator[MutableMapping[str, Any]]:
    """Yield route mappings, raising when the routes list is unusable."""
    routes = environment.get("routes")
    if not isinstance(routes, list):
        raise MalformedDocumentError("Environment has no 'routes' list")
    for index, route in enumerate(routes):
        if not isinstance(route, MutableMapping):
            raise MalformedDocumentError(f"Route {index} is not an object")
        yield route


def _responses(environment: Document) -> Iterator[MutableMapping[str, Any]]:
    """Yield every route response mapping of ``environment``."""
    for route in _routes(environment):
        responses = route.get("responses")
        if not isinstance(responses, list):
            raise MalformedDocumentError(
                f"Route {route.get('uuid', '?')} has no 'responses' list"
            )
        for response in responses:
            if not isinstance(response, MutableMapping):
                raise MalformedDocumentError(
                    f"Route {route.get('uuid', '?')} has a non-object response"
                )
            yield response


def add_proxy_settings(environment: Document) -> None:
    """Fill the proxy and HTTPS settings introduced in 0.4.0beta."""
    if not _is_truthy(environment.get("proxyMode")):
        environment["proxyMode"] = False
    if not _is_truthy(environment.get("proxyHost")):
        environment["proxyHost"] = ""
    if not _is_truthy(environment.get("https")):
        environment["https"] = False


def add_cors_and_route_uuids(environment: Document) -> None:
    """Enable CORS, identify routes and fold ``contentType`` into headers."""
    # A stored ``cors: false`` is falsy and is switched on here.
    if not _is_truthy(environment.get("cors")):
        environment["cors"] = True

    for route in _routes(environment):
        if not _is_truthy(route.get("uuid")):
            route["uuid"] = new_uuid()

        custom_headers = route.get("customHeaders")
        if not _is_truthy(custom_headers):
            continue
        if "contentType" in route and isinstance(custom_headers, list):
            has_content_type = any(
                isinstance(header, MutableMapping)
                and header.get("key") == "Content-Type"
                for header in custom_headers
            )
            if not has_content_type:
                custom_headers.insert(
                    0, {"key": "Content-Type", "value": route["contentType"]}
                )
        route.pop("contentType", None)


def add_missing_route_uuids(environment: Document) -> None:
    """Identify routes that were created without a ``uuid``."""
    for route in _routes(environment):
        if not _is_truthy(route.get("uuid")):
            route["uuid"] = new_uuid()


def add_headers_and_documentation(environment: Document) -> None:
    """Add environment headers, route documentation and rename custom headers."""
    if not _is_truthy(environment.get("headers")):
        environment["headers"] = [_blank_header()]

    for route in _routes(environment):
        file = route.get("file")
        if _is_truthy(file) and isinstance(file, MutableMapping):
            file.setdefault("sendAsBody", False)

        route.setdefault("documentation", "")

        if _is_truthy(route.get("customHeaders")):
            route["headers"] = route.pop("customHeaders")


def flatten_route_file(environment: Document) -> None:
    """Replace the route ``file`` object with ``filePath``/``sendFileAsBody``."""
    environment.pop("duplicates", None)

    for route in _routes(environment):
        if "file" in route:
            file = route.pop("file")
            if _is_truthy(file) and isinstance(file, MutableMapping):
                route["filePath"] = file.get("path", "")
                route["sendFileAsBody"] = file.get("sendAsBody", False)
            else:
                route["filePath"] = ""
                route["sendFileAsBody"] = False
        else:
            route.setdefault("filePath", "")
            route.setdefault("sendFileAsBody", False)
        route.pop("duplicates", None)


# Route fields moved into the first route response by step 6, in order.
RESPONSE_FIELDS = (
    "statusCode",
    "latency",
    "filePath",
    "sendFileAsBody",
    "headers",
    "body",
)


def create_route_responses(environment: Document) -> None:
    """Move the route-level response settings into a ``responses`` list.

    Routes that already hold a ``responses`` list are left untouched.
    """
    for route in _routes(environment):
        if isinstance(route.get("responses"), list):
            continue
        response: dict[str, Any] = {"uuid": new_uuid(), "label": ""}
        for name in RESPONSE_FIELDS:
            if name in route:
                response[name] = route.pop(name)
        response["rules"] = []
        route["responses"] = [response]


def renew_response_uuids(environment: Document) -> None:
    """Issue new identifiers for every route response.

    Responses duplicated by 1.5.0 shared identifiers, so every response gets a
    fresh one regardless of its current value.
    """
    for response in _responses(environment):
        response["uuid"] = new_uuid()


def add_route_enabled(environment: Document) -> None:
    """Add the ``enabled`` flag to every route."""
    for route in _routes(environment):
        route.setdefault("enabled", True)


def add_response_label(environment: Document) -> None:
    """Ensure every route response has a ``label``."""
    for response in _responses(environment):
        if not _is_truthy(response.get("label")):
            response["label"] = ""


def add_proxy_headers(environment: Document) -> None:
    """Add the proxy request and response header lists."""
    if not _is_truthy(environment.get("proxyReqHeaders")):
        environment["proxyReqHeaders"] = [_blank_header()]
    if not _is_truthy(environment.get("proxyResHeaders")):
        environment["proxyResHeaders"] = [_blank_header()]


def add_templating_option_and_numeric_status(environment: Document) -> None:
    """Add ``disableTemplating`` and store ``statusCode`` as an integer."""
    for response in _responses(environment):
        response.setdefault("disableTemplating", False)
        response["statusCode"] = _parse_int(response.get("statusCode"))


def add_rules_operator(environment: Document) -> None:
    """Default the response rules operator to ``OR``."""
    for response in _responses(environment):
        response.setdefault("rulesOperator", "OR")


STEPS: tuple[MigrationStep, ...] = (
    MigrationStep(1, add_proxy_settings, "0.4.0beta", "Add proxy and HTTPS settings"),
    MigrationStep(
        2,
        add_cors_and_route_uuids,
        "1.0.0",
        "Enable CORS, add route uuids, fold contentType into custom headers",
    ),
    MigrationStep(3, add_missing_route_uuids, "1.2.0", "Add missing route uuids"),
    MigrationStep(
        4,
        add_headers_and_documentation,
        "1.3.0",
        "Add environment headers and route documentation, rename customHeaders",
    ),
    MigrationStep(5, flatten_route_file, "1.4.0", "Flatten route file settings"),
    MigrationStep(
        6, create_route_responses, "1.5.0", "Move route settings into responses"
    ),
    MigrationStep(7, renew_response_uuids, "1.5.1", "Renew route response uuids"),
    MigrationStep(8, add_route_enabled, "1.6.0", "Add route enabled flag"),
    MigrationStep(9, add_response_label, "1.6.0", "Add route response label"),
    MigrationStep(
        10, add_proxy_headers, "1.7.0", "Add proxy request/response headers"
    ),
    MigrationStep(
        11,
        add_templating_option_and_numeric_status,
        "1.7.0",
        "Add disableTemplating, convert statusCode to a number",
    ),
    MigrationStep(12, add_rules_operator, "1.8.0", "Add route response rulesOperator"),
)


__all__ = [
    "RESPONSE_FIELDS",
    "STEPS",
    "add_cors_and_route_uuids",
    "add_headers_and_documentation",
    "add_missing_route_uuids",
    "add_proxy_headers",
    "add_proxy_settings",
    "add_response_label",
    "add_route_enabled",
    "add_rules_operator",
    "add_templating_option_and_numeric_status",
    "create_route_responses",
    "flatten_route_file",
    "renew_response_uuids",
]
