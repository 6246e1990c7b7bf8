"""Tests for the GitHub contents-API mirror."""

from __future__ import annotations

import base64
import threading
from unittest.mock import MagicMock

import pytest

from core.config import Settings
from core.errors import MirrorError
from services.github_mirror import GitHubMirror

API = "https://api.github.com/repos/acme/hr-skills/contents"


def _response(status: int = 200, payload=None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.json.return_value = payload
    resp.text = text
    return resp


def _session() -> MagicMock:
    session = MagicMock()
    session.headers = {}
    return session


def _mirror(session: MagicMock, token: str | None = "ghp_test", **overrides) -> GitHubMirror:
    settings = Settings(github_token=token, github_repo="acme/hr-skills", **overrides)
    return GitHubMirror(settings, session=session)


class TestDisabled:
    def test_every_operation_is_a_noop(self):
        session = _session()
        mirror = _mirror(session, token=None)

        assert mirror.enabled is False
        assert mirror.get_file_sha(".claude/skills/x/SKILL.md") is None
        mirror.create_or_update_file(".claude/skills/x/SKILL.md", "body", "msg")
        mirror.delete_file(".claude/skills/x/SKILL.md", "msg")
        mirror.delete_directory(".claude/skills/x", "msg")

        session.get.assert_not_called()
        session.put.assert_not_called()
        session.delete.assert_not_called()
        assert "Authorization" not in session.headers


class TestHeaders:
    def test_bearer_token_and_api_version(self):
        session = _session()
        _mirror(session)
        assert session.headers["Authorization"] == "Bearer ghp_test"
        assert session.headers["Accept"] == "application/vnd.github+json"
        assert session.headers["X-GitHub-Api-Version"] == "2022-11-28"


class TestGetFileSha:
    def test_returns_sha_on_branch(self):
        session = _session()
        session.get.return_value = _response(200, {"sha": "abc123", "content": "..."})
        mirror = _mirror(session, github_branch="dev")

        assert mirror.get_file_sha("a/b.md") == "abc123"
        args, kwargs = session.get.call_args
        assert args[0] == f"{API}/a/b.md"
        assert kwargs["params"] == {"ref": "dev"}

    @pytest.mark.parametrize("status", [401, 403, 404, 500])
    def test_none_on_any_failure(self, status):
        session = _session()
        session.get.return_value = _response(status, text="nope")
        assert _mirror(session).get_file_sha("a/b.md") is None

    def test_none_for_directory_listing(self):
        session = _session()
        session.get.return_value = _response(200, [{"path": "a/b.md", "type": "file"}])
        assert _mirror(session).get_file_sha("a") is None


class TestCreateOrUpdateFile:
    def test_create_new_file(self):
        session = _session()
        session.get.return_value = _response(404)
        session.put.return_value = _response(201, {})
        mirror = _mirror(session)

        mirror.create_or_update_file("skills/x/SKILL.md", "héllo", "Create skill x")

        args, kwargs = session.put.call_args
        assert args[0] == f"{API}/skills/x/SKILL.md"
        body = kwargs["json"]
        assert body["message"] == "Create skill x"
        assert body["branch"] == "main"
        assert base64.b64decode(body["content"]).decode("utf-8") == "héllo"
        assert "sha" not in body

    def test_update_sends_current_sha(self):
        session = _session()
        session.get.return_value = _response(200, {"sha": "old-sha"})
        session.put.return_value = _response(200, {})

        _mirror(session).create_or_update_file("p.md", "x", "Update")

        assert session.put.call_args.kwargs["json"]["sha"] == "old-sha"

    def test_failure_raises_with_status_and_body(self):
        session = _session()
        session.get.return_value = _response(404)
        session.put.return_value = _response(422, text='{"message":"Invalid request"}')

        with pytest.raises(MirrorError) as excinfo:
            _mirror(session).create_or_update_file("p.md", "x", "Update")

        assert excinfo.value.status_code == 422
        assert excinfo.value.body == '{"message":"Invalid request"}'
        assert str(excinfo.value) == 'GitHub API error (422): {"message":"Invalid request"}'


class TestDeleteFile:
    def test_missing_file_is_silent(self):
        session = _session()
        session.get.return_value = _response(404)

        _mirror(session).delete_file("p.md", "Delete")

        session.delete.assert_not_called()

    def test_deletes_with_sha(self):
        session = _session()
        session.get.return_value = _response(200, {"sha": "s1"})
        session.delete.return_value = _response(200, {})

        _mirror(session).delete_file("p.md", "Delete p")

        args, kwargs = session.delete.call_args
        assert args[0] == f"{API}/p.md"
        assert kwargs["json"] == {"message": "Delete p", "sha": "s1", "branch": "main"}

    def test_failure_raises(self):
        session = _session()
        session.get.return_value = _response(200, {"sha": "s1"})
        session.delete.return_value = _response(409, text="conflict")

        with pytest.raises(MirrorError) as excinfo:
            _mirror(session).delete_file("p.md", "Delete p")
        assert excinfo.value.status_code == 409


def _tree_get(listings: dict[str, list], shas: dict[str, str]):
    """session.get side effect serving directory listings and file metadata."""

    def _get(url, params=None, timeout=None):
        path = url[len(API) + 1:]
        if path in listings:
            return _response(200, listings[path])
        if path in shas:
            return _response(200, {"sha": shas[path]})
        return _response(404)

    return _get


class TestDeleteDirectory:
    LISTINGS = {
        "skills/x": [
            {"path": "skills/x/SKILL.md", "type": "file", "sha": "1"},
            {"path": "skills/x/scripts", "type": "dir", "sha": "2"},
        ],
        "skills/x/scripts": [
            {"path": "skills/x/scripts/run.ts", "type": "file", "sha": "3"},
            {"path": "skills/x/scripts/lib", "type": "dir", "sha": "4"},
        ],
        "skills/x/scripts/lib": [
            {"path": "skills/x/scripts/lib/util.ts", "type": "file", "sha": "5"},
        ],
    }
    SHAS = {
        "skills/x/SKILL.md": "1",
        "skills/x/scripts/run.ts": "3",
        "skills/x/scripts/lib/util.ts": "5",
    }

    def _deleted_paths(self, session: MagicMock) -> set[str]:
        return {c.args[0][len(API) + 1:] for c in session.delete.call_args_list}

    def test_deletes_every_file_recursively(self):
        session = _session()
        session.get.side_effect = _tree_get(self.LISTINGS, self.SHAS)
        session.delete.return_value = _response(200, {})

        _mirror(session).delete_directory("skills/x", "Delete skill x")

        assert self._deleted_paths(session) == set(self.SHAS)
        for call in session.delete.call_args_list:
            assert call.kwargs["json"]["message"] == "Delete skill x"

    def test_bounded_concurrency_deletes_the_same_files(self):
        session = _session()
        session.get.side_effect = _tree_get(self.LISTINGS, self.SHAS)
        session.delete.return_value = _response(200, {})

        _mirror(session, mirror_delete_concurrency=4).delete_directory("skills/x", "Delete skill x")

        assert self._deleted_paths(session) == set(self.SHAS)

    def test_missing_directory_is_silent(self):
        session = _session()
        session.get.return_value = _response(404)

        _mirror(session).delete_directory("skills/gone", "Delete")

        session.delete.assert_not_called()

    def test_listing_that_is_not_a_list_is_ignored(self):
        session = _session()
        session.get.return_value = _response(200, {"sha": "abc", "type": "file"})

        _mirror(session).delete_directory("skills/x/SKILL.md", "Delete")

        session.delete.assert_not_called()

    def test_delete_error_propagates(self):
        session = _session()
        session.get.side_effect = _tree_get(self.LISTINGS, self.SHAS)
        session.delete.return_value = _response(500, text="boom")

        with pytest.raises(MirrorError):
            _mirror(session).delete_directory("skills/x", "Delete")

    def test_pool_stops_after_first_failure(self):
        files = [f"skills/big/f{i}.md" for i in range(8)]
        listings = {"skills/big": [{"path": p, "type": "file", "sha": str(i)} for i, p in enumerate(files)]}
        shas = {p: str(i) for i, p in enumerate(files)}
        never = threading.Event()

        def _delete(url, json=None, timeout=None):
            if url.endswith("/f0.md"):
                return _response(500, text="conflict")
            never.wait(0.3)
            return _response(200, {})

        session = _session()
        session.get.side_effect = _tree_get(listings, shas)
        session.delete.side_effect = _delete

        with pytest.raises(MirrorError):
            _mirror(session, mirror_delete_concurrency=2).delete_directory("skills/big", "Delete")

        # f0 fails; at most the two deletes already picked up by the workers follow it
        assert session.delete.call_count <= 3
