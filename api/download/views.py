"""
Installer download view.
"""

import logging
from pathlib import Path

from django.conf import settings
from django.http import FileResponse, JsonResponse
from django.views import View

logger = logging.getLogger(__name__)

INSTALLER_FILENAME = "VibeRyt.exe"


def installer_path() -> Path:
    """Resolve the configured installer path against the project directory."""
    path = Path(settings.INSTALLER_PATH)
    if not path.is_absolute():
        path = Path(settings.BASE_DIR) / path
    return path


class InstallerDownloadView(View):
    """Serves the desktop installer as an attachment."""

    def get(self, _request):
        """Stream the installer, or 404 if it is not deployed."""
        path = installer_path()
        try:
            installer = path.open("rb")
        except OSError as e:
            logger.error("Download error: %s", e, extra={"installer_path": str(path)})
            return JsonResponse({"error": "File not found"}, status=404)

        return FileResponse(
            installer,
            as_attachment=True,
            filename=INSTALLER_FILENAME,
            content_type="application/octet-stream",
        )
