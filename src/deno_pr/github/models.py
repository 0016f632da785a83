"""GitHub REST payload models used by the artifact pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Artifact(BaseModel):
    """One build artifact attached to a workflow run."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    size_in_bytes: int = Field(ge=0)
    digest: str | None = None
    archive_download_url: str


class WorkflowRun(BaseModel):
    """One execution of a CI workflow."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str | None = None
    head_sha: str


class PullRequest(BaseModel):
    """Subset of pull request fields shown before resolving runs."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int
    title: str
    draft: bool | None = None
    head_sha: str
    user_login: str
    user_url: str

    @model_validator(mode="before")
    @classmethod
    def _flatten_api_payload(cls, data: Any) -> Any:
        """Lift nested ``head.sha`` and ``user.*`` from raw API payloads.

        Args:
            data: Raw payload.

        Returns:
            Flattened payload mapping.
        """
        if not isinstance(data, dict) or "head" not in data:
            return data
        head = data.get("head") or {}
        user = data.get("user") or {}
        return {
            "number": data.get("number"),
            "title": data.get("title"),
            "draft": data.get("draft"),
            "head_sha": head.get("sha"),
            "user_login": user.get("login"),
            "user_url": user.get("html_url") or user.get("url"),
        }
