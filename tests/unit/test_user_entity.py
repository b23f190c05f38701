import pytest

from spectrum_accounts.domain.entities import Subject, User, VerificationOutcome


def test_email_normalized_and_defaults():
    u = User(id=None, email=" Alice@Example.COM ")
    assert u.email == "alice@example.com"
    assert u.is_admin is False
    assert u.role == "user"
    assert u.created_at is None


def test_admin_role():
    u = User(id=1, email="a@x.com", is_admin=True)
    assert u.role == "admin"


@pytest.mark.parametrize("email", [None, "", "   "])
def test_email_required(email):
    with pytest.raises(ValueError):
        User(id=None, email=email)


def test_subject_admin_flag():
    assert Subject(user_id=1, role="admin").is_admin
    assert not Subject(user_id=2).is_admin


def test_outcome_delivered_flag():
    ok = VerificationOutcome(42, "0734", 600, "a@b.com")
    failed = VerificationOutcome(42, "0734", 600, "a@b.com", send_error="notification failed")
    assert ok.delivered
    assert not failed.delivered
