"""Root landing page with links to the API docs and the public endpoints."""

from html import escape

_PUBLIC_LINKS = (
    ("/api/v1/events", "Upcoming events"),
    ("/api/v1/featured-events/rotation", "Homepage banner rotation"),
    ("/api/v1/health", "Health check"),
)


def render_root_page(app_name: str, app_version: str) -> str:
    """Return HTML for the root landing page."""
    name = escape(app_name)
    links = "\n".join(
        f'            <li><a href="{href}"><code>{href}</code></a> {label}</li>'
        for href, label in _PUBLIC_LINKS
    )
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{name}</title>
    <style>
        body {{
            font-family: system-ui, sans-serif;
            margin: 0;
            padding: 2rem 1rem;
            background: #fafafa;
            color: #222;
        }}
        .wrap {{ max-width: 560px; margin: 0 auto; }}
        h1 {{ font-weight: 600; margin-bottom: 0.25rem; }}
        .version {{ color: #888; font-size: 0.875rem; }}
        ul {{ padding-left: 1.25rem; line-height: 1.8; }}
        a.btn {{
            display: inline-block;
            margin-right: 0.75rem;
            padding: 0.5rem 1rem;
            border: 1px solid #333;
            color: #222;
            text-decoration: none;
        }}
    </style>
</head>
<body>
    <div class="wrap">
        <h1>{name}</h1>
        <div class="version">v{escape(app_version)}</div>
        <p>Event registration, attendee messaging, featured banners and bulk CSV import.
        API routes live under <code>/api/v1</code>.</p>
        <ul>
{links}
        </ul>
        <p>
            <a href="/docs" class="btn">API docs (Swagger)</a>
            <a href="/redoc" class="btn">ReDoc</a>
        </p>
    </div>
</body>
</html>
""".strip()
