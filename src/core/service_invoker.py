"""External service invocation (core domain).

Turns a declarative ``ServiceDescriptor`` plus the invocation context into one
outbound HTTP call and interprets the answer as a single reply, or as nothing
at all when the descriptor is disabled or silent.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping

from core.config import InvokerConfig
from core.errors import ConfigError
from core.models import Outcome, Reply, ServiceDescriptor, ServiceResponse, Suppressed
from core.ports import HttpTransportPort, TemplateFetcherPort
from core.response_parsing import parse_response_body
from core.templates import render_template, resolve_template_location

LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
ERROR_MESSAGE = "Error ({status}). The {name} service is currently unavailable"


def _require_mapping(config: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = config.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"Service '{config.get('name')}': '{key}' must be a mapping")
    return dict(value)


def build_service_descriptor(config: Mapping[str, Any]) -> ServiceDescriptor:
    """Normalize one service config entry into a ``ServiceDescriptor``."""

    name = config.get("name")
    if not name:
        raise ConfigError("Every external service needs a 'name'")

    data_from_issue = config.get("data_from_issue") or []
    if isinstance(data_from_issue, str):
        data_from_issue = [data_from_issue]

    url = config.get("url")
    return ServiceDescriptor(
        name=str(name),
        command=str(config.get("command") or ""),
        url=str(url).strip() if url else None,
        method=str(config.get("method") or "post").lower(),
        headers={str(k): str(v) for k, v in _require_mapping(config, "headers").items()},
        query_params=_require_mapping(config, "query_params"),
        mapping={str(k): str(v) for k, v in _require_mapping(config, "mapping").items()},
        data_from_issue=tuple(str(key) for key in data_from_issue),
        silent=bool(config.get("silent", False)),
        template_file=config.get("template_file") or None,
        description=str(config.get("description") or ""),
    )


def build_service_descriptors(services_config: Iterable[Mapping[str, Any]]) -> List[ServiceDescriptor]:
    """Build descriptors for every enabled service entry."""

    return [build_service_descriptor(entry) for entry in services_config if entry.get("enabled", True)]


def merge_parameters(descriptor: ServiceDescriptor, context: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge static params, copied context values and renamed context values.

    Later sources win on key collisions: ``query_params`` < ``data_from_issue``
    < ``mapping``. Keys listed in ``data_from_issue`` but absent from the
    context are skipped; mapped keys absent from the context are sent as null.
    """

    parameters: Dict[str, Any] = dict(descriptor.query_params)
    for key in descriptor.data_from_issue:
        if key in context:
            parameters[key] = context[key]
    for param_key, context_key in descriptor.mapping.items():
        parameters[param_key] = context.get(context_key)
    return parameters


def build_headers(descriptor: ServiceDescriptor) -> Dict[str, str]:
    headers = dict(DEFAULT_HEADERS)
    headers.update(descriptor.headers)
    return headers


def render_body(body: str) -> str:
    """Render a success body as reply text.

    Plain text passes through verbatim, an array of text yields its first
    element, and JSON objects are pretty-printed with sorted keys.
    """

    parsed = parse_response_body(body)
    if parsed is None:
        return body or ""
    if parsed.strategy == "array_text":
        return str(parsed.values["response"])
    return json.dumps(parsed.values, indent=2, sort_keys=True, ensure_ascii=False)


class ExternalServiceInvoker:
    """Calls external services and turns their answers into replies."""

    def __init__(
        self,
        transport: HttpTransportPort,
        template_fetcher: TemplateFetcherPort,
        config: InvokerConfig,
    ) -> None:
        self._transport = transport
        self._template_fetcher = template_fetcher
        self._config = config

    def invoke(self, descriptor: ServiceDescriptor, context: Mapping[str, Any]) -> Outcome:
        """Run one service call and return the reply to post, if any."""

        if not (descriptor.url or "").strip():
            LOGGER.debug("Service %s has no url, skipping", descriptor.name)
            return Suppressed("no_target")

        parameters = merge_parameters(descriptor, context)
        headers = build_headers(descriptor)
        response = self._dispatch(descriptor, parameters, headers)

        if not self._config.is_success(response.status):
            LOGGER.warning("Service %s answered with status %s", descriptor.name, response.status)
            if descriptor.silent:
                return Suppressed("silent")
            return Reply(ERROR_MESSAGE.format(status=response.status, name=descriptor.name))

        LOGGER.info("Service %s answered with status %s", descriptor.name, response.status)
        if descriptor.silent:
            return Suppressed("silent")

        if descriptor.template_file:
            text = self._render_with_template(descriptor, context, response)
        else:
            text = render_body(response.body)

        if not text.strip():
            return Suppressed("empty")
        return Reply(text)

    def _dispatch(
        self,
        descriptor: ServiceDescriptor,
        parameters: Dict[str, Any],
        headers: Dict[str, str],
    ) -> ServiceResponse:
        url = str(descriptor.url)
        if descriptor.method.lower() == "get":
            return self._transport.get(url, parameters, headers)
        return self._transport.post(url, json.dumps(parameters), headers)

    def _render_with_template(
        self,
        descriptor: ServiceDescriptor,
        context: Mapping[str, Any],
        response: ServiceResponse,
    ) -> str:
        location = resolve_template_location(
            str(descriptor.template_file), context, self._config.templates_base_url
        )
        # TemplateFetchError propagates to the caller.
        template = self._template_fetcher.fetch(location)
        parsed = parse_response_body(response.body)
        values = parsed.values if parsed is not None else {"response": response.body or ""}
        return render_template(template, values)
