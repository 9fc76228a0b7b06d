"""Application configuration.

One frozen dataclass holds every setting the app reads. Nothing is
looked up from the environment; build the config where you build the app.
"""

from dataclasses import dataclass
from pathlib import Path

# Icon sizes advertised in /manifest.json
PWA_ICON_SIZES: tuple[int, ...] = (72, 96, 128, 144, 152, 192, 384, 512)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, secret_key="s3cr3t")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Signs the storage cookie
    secret_key: str = ""

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
    document_template: str = "_document.html"
    not_found_template: str = "404.html"
    error_template: str = "error.html"
    lang: str = "en"

    # Assets
    asset_manifest: str | Path | None = None  # JSON build manifest, re-read per request
    public_dir: str | Path | None = "public"  # favicon.ico lives here

    # Outbound API
    api_base_url: str = ""
    api_timeout: float = 10.0

    # Storage cookie
    storage_cookie: str = "wren_storage"
    storage_max_age: int = 30 * 86400
    storage_secure: bool = False

    # PWA manifest (/manifest.json)
    pwa_name: str = "Wren App"
    pwa_short_name: str = "Wren"
    pwa_description: str = ""
    pwa_start_url: str = "/"
    pwa_display: str = "standalone"
    pwa_theme_color: str = "#ffffff"
    pwa_background_color: str = "#ffffff"
    pwa_icon_path: str = "/images/pwa/icon-{size}x{size}.png"

    # Logging
    log_level: str = "info"
    log_format: str = "text"  # "text" or "json"
