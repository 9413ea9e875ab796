"""Git access and the fork commit auditor."""

from forkaudit.git.auditor import audit
from forkaudit.git.client import GitClient, VcsClient
from forkaudit.git.models import CommitRecord, MissingCommitReport

__all__ = ["CommitRecord", "GitClient", "MissingCommitReport", "VcsClient", "audit"]
