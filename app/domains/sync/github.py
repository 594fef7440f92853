"""Thin wrapper around the ``gh project`` CLI commands used by the sync job."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass, field
from typing import Any

from app.exceptions.upstream import GitHubCLIError

logger = logging.getLogger(__name__)

GH_TIMEOUT_SECONDS = 60


@dataclass(frozen=True)
class RemoteItem:
    """One item on a GitHub Project board."""

    id: str
    title: str
    status: str | None = None
    assignees: list[str] = field(default_factory=list)

    @property
    def is_done(self) -> bool:
        return (self.status or "").lower() == "done"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RemoteItem:
        raw_assignees = data.get("assignees") or []
        assignees = []
        for assignee in raw_assignees:
            if isinstance(assignee, dict):
                assignee = assignee.get("login")
            if assignee:
                assignees.append(str(assignee))
        return cls(
            id=str(data["id"]),
            title=data.get("title") or (data.get("content") or {}).get("title") or "",
            status=data.get("status"),
            assignees=assignees,
        )


class GitHubProjectClient:
    """Lists and creates project items by shelling out to ``gh``."""

    def __init__(self, project_number: str, owner: str, executable: str = "gh"):
        self.project_number = str(project_number)
        self.owner = owner
        self.executable = executable

    def list_items(self) -> list[RemoteItem]:
        data = self._run(
            ["project", "item-list", self.project_number, "--owner", self.owner, "--format", "json"]
        )
        items = data.get("items") or []
        try:
            return [RemoteItem.from_json(item) for item in items]
        except (KeyError, TypeError, AttributeError) as e:
            raise GitHubCLIError(f"Unexpected item-list payload: {e}") from e

    def create_item(self, title: str) -> str:
        """Create a draft item and return its id."""
        data = self._run(
            [
                "project",
                "item-create",
                self.project_number,
                "--owner",
                self.owner,
                "--title",
                title,
                "--format",
                "json",
            ]
        )
        item_id = data.get("id")
        if not item_id:
            raise GitHubCLIError("gh project item-create returned no id")
        return str(item_id)

    def _run(self, args: list[str]) -> dict[str, Any]:
        command = [self.executable, *args]
        logger.debug("Running %s", " ".join(command[:3]))
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=GH_TIMEOUT_SECONDS,
            )
        except FileNotFoundError as e:
            raise GitHubCLIError("gh CLI not found") from e
        except subprocess.TimeoutExpired as e:
            raise GitHubCLIError(f"gh {args[0]} {args[1]} timed out") from e

        if result.returncode != 0:
            stderr = result.stderr.strip() if result.stderr else "unknown error"
            raise GitHubCLIError(
                f"gh {args[0]} {args[1]} failed: {stderr}",
                returncode=result.returncode,
                stderr=stderr,
            )

        try:
            data = json.loads(result.stdout) if result.stdout.strip() else {}
        except json.JSONDecodeError as e:
            raise GitHubCLIError(f"Failed to parse gh output: {e}") from e
        if not isinstance(data, dict):
            raise GitHubCLIError("gh output is not a JSON object")
        return data
