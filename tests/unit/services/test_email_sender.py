import httpx
import pytest

from src.adapter.services.email_sender import HttpEmailSender, MailCollectionEmailSender, render_mail
from src.app.services.email_sender import EmailDeliveryError, NotificationEmail


def make_email(**overrides):
    data = dict(
        notification_id="n-1",
        user_id="user-1",
        user_email="ada@example.com",
        user_name="Ada Lee",
        tenant_id="tenant-1",
        tenant_name="Harbour View Strata",
        notification_type="meeting",
        title="AGM",
        message="Friday <7pm>",
    )
    data.update(overrides)
    return NotificationEmail(**data)


def test_render_mail_escapes_html():
    mail = render_mail(make_email())

    assert mail.to == "ada@example.com"
    assert mail.subject == "[Harbour View Strata] AGM"
    assert "Friday &lt;7pm&gt;" in mail.html
    assert "Friday <7pm>" in mail.text
    assert mail.context["notification_id"] == "n-1"


@pytest.mark.asyncio
async def test_mail_collection_sender_queues_message(mock_uow):
    sender = MailCollectionEmailSender(lambda: mock_uow)

    await sender.send(make_email())

    queued = mock_uow.mail.create.await_args.args[0]
    assert queued.to == "ada@example.com"
    assert queued.delivery_state == "PENDING"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_http_sender_posts_payload():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(202)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    sender = HttpEmailSender("http://mail.test/send", http_client=client)

    await sender.send(make_email())
    await client.aclose()

    assert seen[0].url == "http://mail.test/send"
    assert b'"user_email":"ada@example.com"' in seen[0].content.replace(b" ", b"")


@pytest.mark.asyncio
async def test_http_sender_raises_on_error_status():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(503)))
    sender = HttpEmailSender("http://mail.test/send", http_client=client)

    with pytest.raises(EmailDeliveryError):
        await sender.send(make_email())
    await client.aclose()
