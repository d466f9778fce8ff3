"""Repository identifier model."""

import re

from pydantic import BaseModel, ConfigDict

from github_talent_sourcer.exceptions import InvalidRepositoryReference

GITHUB_HOST = "github.com"

# owner and name are the first two path segments after the host
_URL_PATTERN = re.compile(r"github\.com[/:]([^/?#\s]+)/([^/?#\s]+)")


class RepoIdentifier(BaseModel):
    """Owner/name pair identifying a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Repository name in owner/name form."""
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name

    @classmethod
    def parse(cls, reference: str) -> "RepoIdentifier":
        """Parse ``owner/name`` shorthand or a GitHub URL.

        Args:
            reference: e.g. ``acme/widgets`` or ``https://github.com/acme/widgets.git``

        Returns:
            RepoIdentifier for the referenced repository

        Raises:
            InvalidRepositoryReference: If the reference cannot be parsed
        """
        value = reference.strip()

        if GITHUB_HOST in value:
            match = _URL_PATTERN.search(value)
            if not match:
                raise InvalidRepositoryReference(reference, "not a repository URL")
            owner, name = match.groups()
            name = name.removesuffix(".git")
            if not name:
                raise InvalidRepositoryReference(reference, "missing repository name")
            return cls(owner=owner, name=name)

        parts = value.split("/")
        if len(parts) != 2 or not all(parts):
            raise InvalidRepositoryReference(
                reference, "use 'owner/repo' or a full GitHub URL"
            )
        return cls(owner=parts[0], name=parts[1])
