"""User Entity — the single persisted record and its partial-update value.

Invariants:
    - User is frozen: id never changes once assigned
    - UserChanges treats an empty string as "not provided"
    - merged() only overwrites fields present in as_updates()
"""

from dataclasses import dataclass, asdict, replace


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str

    def merged(self, changes: "UserChanges") -> "User":
        """Return a copy with the non-empty fields of `changes` applied."""
        return replace(self, **changes.as_updates())

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(id=int(data["id"]), name=data["name"], email=data["email"])


@dataclass(frozen=True)
class UserChanges:
    """Partial update. Empty fields are left untouched by every adapter."""
    name: str = ""
    email: str = ""

    def as_updates(self) -> dict[str, str]:
        updates = {}
        if self.name:
            updates["name"] = self.name
        if self.email:
            updates["email"] = self.email
        return updates

    @property
    def is_empty(self) -> bool:
        return not self.as_updates()
