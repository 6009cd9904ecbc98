"""CI execution context read from the GitHub Actions environment.

GITHUB_REF_NAME, GITHUB_EVENT_NAME, GITHUB_ACTOR, GITHUB_REPOSITORY,
GITHUB_WORKFLOW, GITHUB_RUN_ID and GITHUB_SHA map onto the fields below.
The updater only reads these; it never derives them.
"""

from collections.abc import Iterable

from pydantic import Field
from pydantic_settings import BaseSettings

from ci_baseline.models import BaselineMetadata


class ExecutionContext(BaseSettings):
    """Branch, event and provenance of the current CI run."""

    ref_name: str = Field(default="", description="Branch or tag that triggered the run")
    event_name: str = Field(default="", description="Event kind, e.g. push or pull_request")
    actor: str = Field(default="automated", description="User that triggered the run")
    repository: str | None = Field(default=None, description="owner/name")
    workflow: str | None = Field(default=None, description="Workflow name")
    run_id: str | None = Field(default=None, description="Workflow run identifier")
    sha: str = Field(default="unknown", description="Commit SHA that triggered the run")

    model_config = {"env_prefix": "GITHUB_"}

    def is_main_branch(self, branches: Iterable[str]) -> bool:
        """Case-insensitive membership of the branch in the main-line set."""
        current = self.ref_name.lower()
        return bool(current) and current in {b.lower() for b in branches}

    def is_update_event(self, events: Iterable[str]) -> bool:
        return self.event_name in set(events)

    def metadata(self) -> BaselineMetadata:
        return BaselineMetadata(
            creator=self.actor or "automated",
            repository=self.repository,
            workflow=self.workflow,
            run_id=self.run_id,
        )
