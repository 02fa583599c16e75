# session.py
from dataclasses import dataclass, field
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionState:
    """
    Bearer session of one authenticated printer.

    access_token and subject_id are both empty until the first password grant
    succeeds. expires_at starts at construction time so the first validity
    check always fails.
    """
    access_token: str = ""
    refresh_token: str = ""
    subject_id: str = ""
    expires_at: datetime = field(default_factory=utcnow)

    @property
    def authenticated(self) -> bool:
        return self.access_token != ""
