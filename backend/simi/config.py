from __future__ import annotations

from pydantic import BaseModel


class Settings(BaseModel):
    # URLs
    base_url: str = "/"
    category_prefix: str = "category/"

    # Tables
    table_prefix: str = ""

    # Registry key holding the page that lists posts (its slug prefixes article urls)
    posts_page_key: str = "posts_page"

    # Rendering
    format_separator: str = "\n"

    # Single lookups by id are not remembered unless enabled; only listings are cached.
    cache_single_lookups: bool = False


def load_settings() -> Settings:
    """
    Lightweight env loader without extra dependency.
    """

    import os
    from pathlib import Path

    def _parse_dotenv_line(line: str) -> tuple[str, str] | None:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            return None
        if stripped.startswith("export "):
            stripped = stripped[len("export ") :].lstrip()
        if "=" not in stripped:
            return None
        key, value = stripped.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            return None

        # Remove surrounding single or double quotes.
        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        return key, value

    def _load_dotenv_file(path: Path) -> None:
        """
        Best-effort .env reader. Only sets variables not already in os.environ.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except OSError:
            return
        for raw_line in content.splitlines():
            parsed = _parse_dotenv_line(raw_line)
            if parsed is None:
                continue
            key, value = parsed
            os.environ.setdefault(key, value)

    def _try_load_dotenv() -> None:
        explicit = (os.getenv("ENV_FILE") or "").strip()
        candidates: list[Path] = []
        if explicit:
            candidates.append(Path(explicit))
        candidates.append(Path("backend/.env"))
        candidates.append(Path(".env"))

        for candidate in candidates:
            if candidate.is_file():
                _load_dotenv_file(candidate)
                break

    _try_load_dotenv()

    def getenv_bool(name: str, default: bool) -> bool:
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        return raw.strip().lower() in {"1", "true", "yes", "y", "on"}

    def getenv_text(name: str, default: str) -> str:
        raw = os.getenv(name)
        if raw is None:
            return default
        # Allow escaped newlines/tabs, e.g. SIMI_FORMAT_SEPARATOR="\n"
        return raw.encode("utf-8").decode("unicode_escape")

    return Settings(
        base_url=os.getenv("SIMI_BASE_URL", "/"),
        category_prefix=os.getenv("SIMI_CATEGORY_PREFIX", "category/"),
        table_prefix=os.getenv("SIMI_TABLE_PREFIX", ""),
        posts_page_key=os.getenv("SIMI_POSTS_PAGE_KEY", "posts_page"),
        format_separator=getenv_text("SIMI_FORMAT_SEPARATOR", "\n"),
        cache_single_lookups=getenv_bool("SIMI_CACHE_SINGLE_LOOKUPS", False),
    )
