"""Password reset email rendering and the outbox."""

from homefinder.services.email_service import EmailService


def test_password_reset_email_contains_link():
    email = EmailService(reset_url_base='https://homefinder.test/reset')

    email.send_password_reset('buyer@example.com', 'Châu', 'tok123', '2030-01-01T00:00:00+00:00')

    [sent] = email.outbox
    assert sent.to == 'buyer@example.com'
    assert 'Châu' in sent.body
    assert 'https://homefinder.test/reset/tok123' in sent.body
    assert '2030-01-01T00:00:00+00:00' in sent.body


def test_outbox_keeps_most_recent_emails():
    email = EmailService(outbox_limit=2)

    for n in range(3):
        email.send_email(f'user{n}@example.com', 'Subject', 'Body')

    assert [e.to for e in email.outbox] == ['user1@example.com', 'user2@example.com']
