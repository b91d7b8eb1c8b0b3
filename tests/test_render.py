from tone_reply import notifier
from tone_reply.render import build_view
from tone_reply.session import FormSession, FormState


def test_idle_view_without_response():
    view = build_view(FormSession("abc"))

    assert view.submit_label == "Gerar Resposta"
    assert view.submit_disabled is False
    assert view.show_response is False
    assert [t.id for t in view.tones if t.checked] == ["formal"]
    assert view.notifications == []


def test_submitting_view_disables_button():
    session = FormSession("abc")
    session.state = FormState.SUBMITTING

    view = build_view(session)

    assert view.submit_label == "Gerando..."
    assert view.submit_disabled is True


def test_view_shows_response_and_notifications():
    session = FormSession("abc")
    session.update_input(input_text="Oi", tone="humor", webhook_url="https://x.test/hook")
    session.response_text = "Haha"
    session.response_tone = "humor"

    view = build_view(session, [notifier.SUCCESS])

    assert view.show_response is True
    assert view.response_text == "Haha"
    assert view.response_tone_label == "Com Humor"
    assert view.input_text == "Oi"
    assert view.webhook_url == "https://x.test/hook"
    assert view.notifications == [notifier.SUCCESS]


def test_unknown_tone_has_no_label():
    session = FormSession("abc")
    session.update_input(tone="poetico")
    session.response_text = "Oi"
    session.response_tone = "poetico"

    view = build_view(session)

    assert view.response_tone_label is None
    assert not any(t.checked for t in view.tones)


def test_label_follows_generated_tone_not_current_selection():
    session = FormSession("abc")
    session.response_text = "Haha"
    session.response_tone = "humor"
    session.update_input(tone="formal")

    view = build_view(session)

    assert view.response_tone_label == "Com Humor"
    assert [t.id for t in view.tones if t.checked] == ["formal"]
