"""Version information for the driver."""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_SHORT_COMMIT_LENGTH = 7


@dataclass
class VersionInfo:
    """Build-time version data, with fallbacks to a VERSION file and git."""

    version: str = ""
    git_commit: str = ""
    version_meta: str = ""
    version_file: Path | None = None
    repo_dir: Path | None = None

    def get(self) -> str:
        """Return the version, reading the VERSION file if none was set."""
        if self.version:
            return self.version
        if self.version_file is None:
            logger.error("failed to get version: no version file configured")
            return ""
        try:
            content = Path(self.version_file).read_text()
        except OSError as exc:
            logger.error("failed to get version: %s", exc)
            return ""
        return content.strip()

    def get_git_commit(self) -> str:
        """Return the git commit, asking git directly if none was set."""
        if self.git_commit:
            return self.git_commit
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--verify", "HEAD"],
                cwd=self.repo_dir,
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.error("failed to get git commit: %s", exc)
            return ""
        return result.stdout.strip()

    def verbose(self) -> str:
        """Return the version joined with the short git commit."""
        commit = self.get_git_commit()
        if len(commit) < _SHORT_COMMIT_LENGTH:
            raise ValueError(
                f"git commit {commit!r} is shorter than {_SHORT_COMMIT_LENGTH} characters"
            )
        return "-".join([self.get(), commit[:_SHORT_COMMIT_LENGTH]])

    def details(self) -> str:
        """Return the version details reported in usage events."""
        return self.verbose()