from typing import Any

from tvtantrum.core.base_client import BaseClient
from tvtantrum.core.config import settings
from tvtantrum.core.version import __version__

RAW_GITHUB_URL = "https://raw.githubusercontent.com"


class GitHubCatalogClient(BaseClient):
    """
    Fetches the reviewed-shows dataset from a GitHub repository.
    """

    def __init__(
        self,
        owner: str | None = None,
        repo: str | None = None,
        branch: str | None = None,
        data_path: str | None = None,
        token: str | None = None,
        timeout: float = 15.0,
        max_retries: int = 3,
        **kwargs: Any,
    ):
        self.owner = owner or settings.GITHUB_OWNER
        self.repo = repo or settings.GITHUB_REPO
        self.branch = branch or settings.GITHUB_BRANCH
        self.data_path = (data_path if data_path is not None else settings.GITHUB_DATA_PATH).strip("/")
        headers = {
            "User-Agent": f"TVTantrum/{__version__}",
            "Accept": "application/json",
        }
        token = token or settings.GITHUB_TOKEN
        if token:
            headers["Authorization"] = f"token {token}"
        super().__init__(
            base_url=f"{RAW_GITHUB_URL}/{self.owner}/{self.repo}/{self.branch}",
            timeout=timeout,
            max_retries=max_retries,
            headers=headers,
            **kwargs,
        )

    def _path(self, filename: str) -> str:
        return f"/{self.data_path}/{filename}" if self.data_path else f"/{filename}"

    def image_url(self, image_filename: str) -> str:
        return f"{self.base_url}/client/public/images/{image_filename}"

    async def fetch_reviewed_shows(self) -> list[dict[str, Any]]:
        """Raw show records; a single-object file is returned as a one-item list."""
        data = await self.get(self._path("reviewed_shows.json"))
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise ValueError(f"Unexpected reviewed_shows.json payload of type {type(data).__name__}")
        return data
