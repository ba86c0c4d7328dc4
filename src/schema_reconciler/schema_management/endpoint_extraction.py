"""Endpoint extraction from the ``paths`` section of a document."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from .schema_models import Endpoint, SchemaNode
from .schema_translation import schema_node_from_raw

HTTP_METHODS: tuple[str, ...] = ("get", "post", "put", "patch", "delete", "options", "head")
_REQUEST_MEDIA_TYPES = (
    "application/json",
    "application/x-www-form-urlencoded",
    "multipart/form-data",
)
_SUCCESS_STATUS_CODES = ("200", "201", "202", "204")


def extract_endpoints(paths: Any) -> tuple[Endpoint, ...]:
    """Return every operation under ``paths`` with its request and response schema."""
    if not isinstance(paths, Mapping):
        return ()

    endpoints: list[Endpoint] = []
    for path, path_item in paths.items():
        if not isinstance(path_item, Mapping):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, Mapping):
                continue
            endpoint_id = f"{method.upper()} {path}"
            endpoints.append(
                Endpoint(
                    id=endpoint_id,
                    method=method.upper(),
                    path=str(path),
                    summary=str(
                        operation.get("summary") or operation.get("description") or endpoint_id
                    ),
                    request_schema=_request_schema(operation),
                    response_schema=_response_schema(operation),
                )
            )
    return tuple(endpoints)


def _request_schema(operation: Mapping[str, Any]) -> SchemaNode | None:
    request_body = operation.get("requestBody")
    if isinstance(request_body, Mapping):
        media = _pick_media(request_body.get("content"), _REQUEST_MEDIA_TYPES)
        return _schema_of(media)

    parameters = operation.get("parameters")
    if isinstance(parameters, Sequence) and not isinstance(parameters, str):
        for parameter in parameters:
            if isinstance(parameter, Mapping) and parameter.get("in") == "body":
                return _schema_of(parameter)
    return None


def _response_schema(operation: Mapping[str, Any]) -> SchemaNode | None:
    responses = operation.get("responses")
    if not isinstance(responses, Mapping):
        return None

    by_status = {str(code): value for code, value in responses.items()}
    success = next(
        (
            by_status[code]
            for code in _SUCCESS_STATUS_CODES
            if isinstance(by_status.get(code), Mapping)
        ),
        None,
    )
    if success is None:
        return None
    if "content" in success:
        return _schema_of(_pick_media(success.get("content"), ("application/json",)))
    return _schema_of(success)


def _pick_media(content: Any, preferred: Sequence[str]) -> Any:
    if not isinstance(content, Mapping) or not content:
        return None
    for media_type in preferred:
        if media_type in content:
            return content[media_type]
    return next(iter(content.values()))


def _schema_of(container: Any) -> SchemaNode | None:
    if not isinstance(container, Mapping) or "schema" not in container:
        return None
    return schema_node_from_raw(container["schema"])
