"""
services/github_mirror.py
-------------------------
Mirrors skill file changes to a GitHub repository through the
REST "contents" API (one commit per call).

Disabled when no GITHUB_TOKEN is configured: every method then returns
immediately without touching the network, and the skill store keeps
working on local disk only.

Failure semantics:
  - get_file_sha          -> None on any non-2xx (404 and auth errors alike)
  - create_or_update_file -> MirrorError on non-2xx
  - delete_file           -> silent when the file is already gone, else MirrorError
  - delete_directory      -> silent when a listing fails, else MirrorError from deletes

There is no retry and no reconciliation with the local store.

Owner: Services team
Depends on: requests, core/config, core/errors
Depended on by: core/skill_store
"""

import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests

from core.config import Settings
from core.errors import MirrorError

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT = 30


class GitHubMirror:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.enabled = settings.mirror_enabled
        self.branch = settings.github_branch
        self.api_base = (
            f"{settings.github_api_url.rstrip('/')}/repos/{settings.github_repo}/contents"
        )
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        })
        if settings.github_token:
            self._session.headers["Authorization"] = f"Bearer {settings.github_token}"

        if not self.enabled:
            logger.warning("GITHUB_TOKEN not set; GitHub sync disabled")

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.api_base}/{path}"

    def _get(self, path: str) -> requests.Response:
        logger.debug("GET %s@%s", path, self.branch)
        return self._session.get(
            self._url(path), params={"ref": self.branch}, timeout=DEFAULT_TIMEOUT,
        )

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if not response.ok:
            raise MirrorError(response.status_code, response.text)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_file_sha(self, path: str) -> Optional[str]:
        """Blob sha of a file on the branch, or None if it cannot be fetched."""
        if not self.enabled:
            return None
        response = self._get(path)
        if not response.ok:
            return None
        data = response.json()
        if not isinstance(data, dict):
            return None
        return data.get("sha")

    def create_or_update_file(self, path: str, content: str, message: str) -> None:
        """
        Commit content to path. The current sha is looked up first:
        GitHub needs it to overwrite an existing file.
        """
        if not self.enabled:
            return

        sha = self.get_file_sha(path)
        body = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        logger.debug("PUT %s (%s)", path, "update" if sha else "create")
        response = self._session.put(self._url(path), json=body, timeout=DEFAULT_TIMEOUT)
        self._raise_for_status(response)

    def delete_file(self, path: str, message: str) -> None:
        """Delete a single file. A file that does not exist remotely is not an error."""
        if not self.enabled:
            return

        sha = self.get_file_sha(path)
        if not sha:
            logger.debug("Skip DELETE %s: not in repository", path)
            return

        logger.debug("DELETE %s", path)
        response = self._session.delete(
            self._url(path),
            json={"message": message, "sha": sha, "branch": self.branch},
            timeout=DEFAULT_TIMEOUT,
        )
        self._raise_for_status(response)

    def delete_directory(self, path: str, message: str) -> None:
        """
        Delete every file under path. GitHub has no directory delete, so the
        tree is listed level by level into a worklist, then each file is
        deleted with its own commit.

        Deletes run on up to settings.mirror_delete_concurrency threads.
        Concurrent commits to one branch can conflict, hence the default of 1.
        """
        if not self.enabled:
            return

        files = self._collect_files(path)
        if not files:
            return

        workers = min(self.settings.mirror_delete_concurrency, len(files))
        logger.info("Deleting %d file(s) under %s from GitHub", len(files), path)
        if workers <= 1:
            for file_path in files:
                self.delete_file(file_path, message)
            return

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self.delete_file, fp, message) for fp in files]
            try:
                for future in futures:
                    future.result()
            except MirrorError:
                # deletes not yet started are dropped; running ones finish
                pool.shutdown(wait=True, cancel_futures=True)
                raise

    def _collect_files(self, path: str) -> list[str]:
        """File paths under path; directories whose listing fails are skipped."""
        files: list[str] = []
        pending = [path]
        while pending:
            dir_path = pending.pop()
            response = self._get(dir_path)
            if not response.ok:
                logger.debug("Listing %s failed (%d); treating as absent", dir_path, response.status_code)
                continue
            entries = response.json()
            if not isinstance(entries, list):
                continue
            for entry in entries:
                if entry.get("type") == "dir":
                    pending.append(entry["path"])
                else:
                    files.append(entry["path"])
        return files
