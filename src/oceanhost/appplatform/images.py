"""
Container image reference parsing.

A best-effort heuristic, not a full reference grammar: it only needs to
pick the registry type, repository and tag/digest App Platform expects.
"""

from __future__ import annotations

from dataclasses import dataclass

from oceanhost.appplatform.models import ImageSource, RegistryType

DOCR_HOST = "registry.digitalocean.com"
GHCR_HOST = "ghcr.io"
DEFAULT_TAG = "latest"


@dataclass(frozen=True)
class ImageReference:
    """A parsed image reference."""

    repository: str
    tag: str | None
    registry_type: RegistryType
    digest: str | None = None

    def to_image_source(self) -> ImageSource:
        return ImageSource(
            registry_type=self.registry_type,
            repository=self.repository,
            tag=self.tag,
            digest=self.digest,
        )


def parse_image_reference(image: str) -> ImageReference:
    """
    Parse an image reference into repository, tag and registry type.

    Examples:
        nginx -> (nginx, latest, DOCKER_HUB)
        nginx:1.25 -> (nginx, 1.25, DOCKER_HUB)
        registry.digitalocean.com/acme/api:v2 -> (acme/api, v2, DOCR)
        ghcr.io/acme/api:v2 -> (ghcr.io/acme/api, v2, GHCR)
        localhost:5000/api -> (localhost:5000/api, latest, DOCKER_HUB)
        redis@sha256:abc -> (redis, None, DOCKER_HUB, digest sha256:abc)

    Never raises; unexpected input ends up as the repository.
    """
    reference = image.strip()

    digest: str | None = None
    if "@" in reference:
        reference, digest = reference.split("@", 1)
        digest = digest or None

    repository = reference
    tag: str | None = None
    if ":" in reference:
        head, _, candidate = reference.rpartition(":")
        # A colon followed by a path is a registry port, not a tag
        if head and candidate and "/" not in candidate:
            repository, tag = head, candidate

    # App Platform takes a tag or a digest, never both
    if digest is not None:
        tag = None
    elif tag is None:
        tag = DEFAULT_TAG

    if repository.startswith(f"{DOCR_HOST}/"):
        registry_type = RegistryType.DOCR
        repository = repository[len(DOCR_HOST) + 1 :]
    elif repository.startswith(GHCR_HOST):
        registry_type = RegistryType.GHCR
    else:
        registry_type = RegistryType.DOCKER_HUB

    return ImageReference(
        repository=repository,
        tag=tag,
        registry_type=registry_type,
        digest=digest,
    )
