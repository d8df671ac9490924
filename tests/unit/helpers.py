"""Shared assertions for unit tests."""

from docuchat.session import Session, SessionStatus


def assert_fresh(session: Session) -> None:
    """Assert the session is indistinguishable from a new one."""
    assert session.status is SessionStatus.IDLE
    assert session.document is None
    assert session.extracted_text == ""
    assert session.extraction is None
    assert session.summary is None
    assert session.turns == ()
