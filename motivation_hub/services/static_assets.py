"""Static asset serving with single-page-app fallback."""

import logging
from pathlib import Path

from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope


logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"


class SinglePageAppStaticFiles(StaticFiles):
    """Serves files from ``public_dir`` and answers every miss with ``index.html``.

    Paths the filesystem refuses outright (embedded NUL, over-long names) are
    treated as misses too, so client-side routes always load the front-end shell.
    """

    def __init__(self, public_dir: str | Path) -> None:
        super().__init__(directory=public_dir, html=True)

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        except (OSError, ValueError) as exc:
            logger.warning(
                "static_asset_lookup_rejected error_type=%s",
                type(exc).__name__,
            )
        logger.debug("static_asset_fallback request_path=%s", path)
        try:
            return await super().get_response(INDEX_DOCUMENT, scope)
        except HTTPException:
            logger.error("static_fallback_missing request_path=%s", path)
            raise


def build_static_assets(public_dir: str) -> SinglePageAppStaticFiles | None:
    if not Path(public_dir).is_dir():
        logger.warning("static_assets_disabled public_dir=%s", public_dir)
        return None
    return SinglePageAppStaticFiles(public_dir)
