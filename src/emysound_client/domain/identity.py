"""
Track identity assignment for insertion.

Two schemes exist and exactly one is active per policy:

- RANDOM: a fresh uuid4 per call. Re-submitting a track registers a duplicate.
- METADATA: a uuid5 over artist, title and extra metadata. The same inputs
  always produce the same id, so the service can detect re-submissions.

Mixing schemes against one service breaks the idempotence of METADATA ids,
which is why the scheme is fixed at policy construction.
"""

import json
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Namespace for metadata-derived track ids. Changing it re-keys every track.
EMYSOUND_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_DNS, "emysound-client")


class IdentityScheme(str, Enum):
    RANDOM = "random"
    METADATA = "metadata"


@dataclass(frozen=True)
class TrackIdentity:
    """Identifier assigned to an inserted track.

    Attributes:
        uuid: The 128-bit identifier
        value: String sent as the `Id` form field
        scheme: Scheme that produced the identifier
    """

    uuid: uuid.UUID
    value: str
    scheme: IdentityScheme

    def __str__(self) -> str:
        return self.value


def metadata_key(artist: str, title: str, extra: Optional[str] = None) -> str:
    """JSON array of (artist, title, extra), hashed into a metadata-derived id."""
    return json.dumps([artist, title, extra or ""], ensure_ascii=False)


def metadata_track_id(artist: str, title: str, extra: Optional[str] = None) -> uuid.UUID:
    """Deterministic track id for (artist, title, extra)."""
    return uuid.uuid5(EMYSOUND_NAMESPACE, metadata_key(artist, title, extra))


def random_track_id() -> uuid.UUID:
    return uuid.uuid4()


def compose_identity(track_id: uuid.UUID, artist: str, title: str) -> str:
    """Human-readable id string, e.g. "Artist - Title [<uuid>]"."""
    return f"{artist} - {title} [{track_id}]"


@dataclass(frozen=True)
class IdentityPolicy:
    """The active identity scheme of a deployment.

    Attributes:
        scheme: RANDOM or METADATA
        compose: Send "Artist - Title [<uuid>]" instead of the bare uuid
    """

    scheme: IdentityScheme = IdentityScheme.METADATA
    compose: bool = False

    @classmethod
    def from_name(cls, name: str, compose: bool = False) -> "IdentityPolicy":
        valid = ", ".join(s.value for s in IdentityScheme)
        if not isinstance(name, str):
            raise ValueError(
                f"Invalid identity scheme: {name!r}. Valid schemes are: {valid}"
            )
        try:
            scheme = IdentityScheme(name.lower())
        except ValueError:
            raise ValueError(
                f"Invalid identity scheme: {name!r}. Valid schemes are: {valid}"
            ) from None
        return cls(scheme=scheme, compose=compose)

    def assign(
        self, artist: str, title: str, extra: Optional[str] = None
    ) -> TrackIdentity:
        if self.scheme is IdentityScheme.METADATA:
            track_id = metadata_track_id(artist, title, extra)
        else:
            track_id = random_track_id()

        value = (
            compose_identity(track_id, artist, title) if self.compose else str(track_id)
        )
        return TrackIdentity(uuid=track_id, value=value, scheme=self.scheme)
