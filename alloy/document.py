"""The HTML document that wraps a server-rendered page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from jinja2 import Environment

from .env import is_dev
from .page import Link, MetaTag, Page

_TEMPLATE = """<!DOCTYPE html>
<html lang="{{ lang }}" class="{{ css_class }}">
<head>
    <meta charset="UTF-8">
	<meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{{ title|safe }}</title>
	<link rel="icon" href="/.alloy/favicon.svg" type="image/svg+xml" />
	<link rel="stylesheet" href="{{ css }}" />
	{% for tag in meta_tags %}
		<meta name="{{ tag.name }}" content="{{ tag.content }}" property="{{ tag.property }}" />
	{% endfor %}
	{% for link in links %}
		<link rel="{{ link.rel }}" href="{{ link.href }}" />
	{% endfor %}
</head>
<body>
    <div id="page">{{ rendered_content|safe }}</div>
	{% if hydrate %}
	<script type="module" src="{{ js }}"></script>
	<script>window.PAGE_PROPS = {{ initial_props|safe }};</script>
	{% endif %}

	{% if is_dev %}
	<script>
      let reconnectAttempts = 0;
      let reconnectDelay = 500;
      const maxReconnectDelay = 5000;

      function debounce(func, timeout = 500) {
        let timer;
        return (...args) => {
          clearTimeout(timer);
          timer = setTimeout(() => {
            func.apply(this, args);
          }, timeout);
        };
      }

      const reload = debounce(() => {
        console.log("reloading...");
        window.location.reload(true);
      });

      let isFirstConnection = true;

      function start() {
        const wsPort = "{{ websocket_port }}" || window.location.port || "8080";
        const wsUrl = "ws://" + window.location.hostname + ":" + wsPort + "/ws";
        let socket = new WebSocket(wsUrl);

        socket.onopen = () => {
          if (reconnectAttempts > 0) {
            console.log("reconnected, reloading...");
            reload();
          }
          reconnectAttempts = 0;
          reconnectDelay = 500;
          isFirstConnection = false;
        };

        socket.onmessage = reload;

        socket.onerror = () => {
          socket.close();
        };

        socket.onclose = () => {
          socket = null;
          reconnectAttempts++;
          const delay = Math.min(reconnectDelay * Math.pow(1.5, reconnectAttempts), maxReconnectDelay);
          setTimeout(start, delay);
        };
      }

      start();
	</script>
	{% endif %}
</body>
</html>"""

_environment = Environment(autoescape=True, keep_trailing_newline=True)
_template = _environment.from_string(_TEMPLATE)


@dataclass
class DocumentData:
    """Everything the page document is filled with."""

    rendered_content: str = ""
    initial_props: str = "{}"
    js: str = ""
    css: str = ""
    title: str = ""
    is_dev: bool = False
    hydrate: bool = True
    route_id: str = ""
    meta_tags: list[MetaTag] = field(default_factory=list)
    links: list[Link] = field(default_factory=list)
    lang: str = ""
    css_class: str = ""
    websocket_port: str = ""


def render_document(data: DocumentData) -> str:
    """Return the full HTML document for ``data``."""
    return _template.render(
        rendered_content=data.rendered_content,
        initial_props=data.initial_props,
        js=data.js,
        css=data.css,
        title=data.title,
        is_dev=data.is_dev,
        hydrate=data.hydrate,
        route_id=data.route_id,
        meta_tags=data.meta_tags,
        links=data.links,
        lang=data.lang,
        css_class=data.css_class,
        websocket_port=data.websocket_port,
    )


def document_for_page(
    page: Page, rendered_html: str, props_json: str, client_js: str, client_css: str
) -> str:
    """Return the HTML document for a page with its rendered markup and bundles."""
    return render_document(
        DocumentData(
            rendered_content=rendered_html,
            initial_props=props_json,
            js=page.asset_url(client_js),
            css=page.asset_url(client_css),
            title=page.title,
            is_dev=is_dev(),
            hydrate=page.interactive,
            route_id=page.file,
            meta_tags=list(page.meta_tags),
            links=list(page.links),
            lang=page.lang,
            css_class=page.css_class,
            websocket_port="",
        )
    )


def error_payload(
    error: Any, route: Optional[str] = None, file: Optional[str] = None
) -> dict[str, str]:
    """Return the JSON body sent when rendering a page fails."""
    payload = {"error": str(error)}
    if route is not None:
        payload["page"] = route
    if file is not None:
        payload["file"] = file
    return payload