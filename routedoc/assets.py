"""
Swagger UI page.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from jinja2 import Environment, select_autoescape

# CDN builds are listed at https://cdnjs.com/libraries/swagger-ui
DEFAULT_CDN = "https://cdnjs.cloudflare.com/ajax/libs/swagger-ui/4.11.1"
SPEC_NAME = "swagger.json"

_SWAGGER_UI_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <title>{{ title }}</title>
    <link rel="stylesheet" type="text/css" href="{{ cdn }}/swagger-ui.css">
    <link rel="icon" type="image/png" href="{{ cdn }}/favicon-32x32.png" sizes="32x32">
    <link rel="icon" type="image/png" href="{{ cdn }}/favicon-16x16.png" sizes="16x16">
    <style>
        html { box-sizing: border-box; overflow: -moz-scrollbars-vertical; overflow-y: scroll; }
        *, *:before, *:after { box-sizing: inherit; }
        body { margin: 0; background: #fafafa; }
{%- if hide_top %}
        #swagger-ui > .swagger-container > .topbar { display: none; }
{%- endif %}
    </style>
</head>
<body>
    <div id="swagger-ui"></div>
    <script src="{{ cdn }}/swagger-ui-bundle.js" charset="UTF-8" crossorigin="anonymous"></script>
    <script src="{{ cdn }}/swagger-ui-standalone-preset.js" charset="UTF-8" crossorigin="anonymous"></script>
    <script>
        window.onload = () => {
            let specPath = {{ spec_name | tojson }};
            if (!window.location.pathname.endsWith("/")) {
                specPath = "/" + specPath;
            }
            const spec = {{ spec | tojson }};
            if (spec) {
                spec.host = window.location.host;
                let docPath = {{ doc_path | tojson }};
                let basePath = window.location.pathname;
                if (!docPath.endsWith("/")) { docPath += "/"; }
                if (!basePath.endsWith("/")) { basePath += "/"; }
                if (basePath.endsWith(docPath)) {
                    basePath = basePath.slice(0, -docPath.length);
                }
                spec.basePath = basePath;
            }
            window.ui = SwaggerUIBundle({
                url: window.location.origin + window.location.pathname + specPath,
                spec: spec || undefined,
                dom_id: '#swagger-ui',
                deepLinking: true,
                presets: [
                    SwaggerUIBundle.presets.apis,
                    SwaggerUIStandalonePreset,
                ],
                plugins: [
                    SwaggerUIBundle.plugins.DownloadUrl,
                ],
                layout: 'StandaloneLayout',
            });
        };
    </script>
</body>
</html>"""

_env = Environment(
    autoescape=select_autoescape(enabled_extensions=["html", "htm", "xml"], default_for_string=True),
)
_template = _env.from_string(_SWAGGER_UI_HTML)


def render_swagger_ui(
    title: str,
    cdn: str = "",
    spec: Optional[Dict[str, Any]] = None,
    doc_path: str = "",
    hide_top: bool = False,
) -> str:
    """
    Render the UI page.

    With ``spec`` the document is embedded inline and the viewer points
    its ``basePath`` at the page's mount point; without it the viewer
    fetches ``swagger.json`` next to the page.
    """
    return _template.render(
        title=title,
        cdn=cdn or DEFAULT_CDN,
        spec_name=SPEC_NAME,
        spec=spec,
        doc_path=doc_path,
        hide_top=hide_top,
    )


__all__ = [
    "DEFAULT_CDN",
    "SPEC_NAME",
    "render_swagger_ui",
]
